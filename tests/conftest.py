import os
import pytest
import sys
from pathlib import Path
from PIL import Image

# Run Qt headless unless a platform is explicitly configured
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import dashboard_builder
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from dashboard_builder.core.models import CanvasBounds, Rect  # noqa: E402


GAP = 20


# Common test fixtures
@pytest.fixture
def gap():
    """Default clearance / grid quantum."""
    return GAP


@pytest.fixture
def bounds():
    """An 800x600 canvas."""
    return CanvasBounds(800, 600)


@pytest.fixture
def side_by_side():
    """Two default-size blocks in the first row of an 800px canvas."""
    return {
        "a": Rect("a", 20, 20, 300, 200),
        "b": Rect("b", 340, 20, 300, 200),
    }


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="red")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
