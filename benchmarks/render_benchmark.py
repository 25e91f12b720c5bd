import json
import sys
import time

from profile_app.application.rendering import TemplateCache
from profile_app.core.config import Settings
from profile_app.domain.models import UserRecord

MIN_OPS_PER_SEC = 20000


def create_mock_user():
    return UserRecord(
        id="0123456789abcdef01234567",
        name="<script>alert(1)</script> Jane Doe",
        email="jane@example.com",
        hobbies="Reading, Swimming, Hiking",
        location="Nairobi",
    )


def run_render_benchmark(iterations=200000):
    templates = TemplateCache(Settings().views_dir)
    user = create_mock_user()

    start_time = time.perf_counter()
    last = ""
    for _ in range(iterations):
        last = templates.render_profile(user)
    elapsed = time.perf_counter() - start_time

    if "&lt;script&gt;" not in last:
        raise RuntimeError("render_profile did not escape HTML as expected")

    ops_per_sec = round(iterations / elapsed)
    print(
        json.dumps(
            {
                "benchmark": "render_profile",
                "iterations": iterations,
                "duration_ms": round(elapsed * 1000),
                "ops_per_sec": ops_per_sec,
            },
            indent=2,
        )
    )

    # Catches accidental quadratic work, not small regressions.
    if ops_per_sec < MIN_OPS_PER_SEC:
        raise RuntimeError(f"perf regression: render_profile too slow ({ops_per_sec} ops/sec)")


if __name__ == "__main__":
    try:
        run_render_benchmark()
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
