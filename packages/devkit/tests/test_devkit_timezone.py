from datetime import timezone

from devkit.timezone import now_utc


def test_now_utc_is_timezone_aware() -> None:
    assert now_utc().tzinfo == timezone.utc
