from __future__ import annotations

from pathlib import Path

import pytest


SAMPLE = "\n".join(
    [
        "; sample used across the tests",
        "top = level",
        "",
        "[graphics]",
        "vsync = on        # trailing comment",
        "fps_limit = 144",
        "gamma = 2.2",
        "",
        "[audio]",
        "volume = 80",
        "device =    ",
        "muted =",
        "",
    ]
)


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "app.ini"
    path.write_text(SAMPLE, encoding="utf-8")
    return path
