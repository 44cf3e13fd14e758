import json
import pytest
from pathlib import Path

ZERO_FACE = {
    "mouthSmileLeft": 0.0, "mouthSmileRight": 0.0,
    "browInnerUp": 0.0, "jawOpen": 0.0,
}

@pytest.fixture
def still_face():
    return dict(ZERO_FACE)

@pytest.fixture
def smiling_face():
    return {"mouthSmileLeft": 0.5, "mouthSmileRight": 0.5,
            "cheekSquintLeft": 0.2, "cheekSquintRight": 0.2}

@pytest.fixture
def sad_face():
    return {"browInnerUp": 0.5, "mouthFrownLeft": 0.3, "mouthFrownRight": 0.3}

@pytest.fixture
def frames_path(tmp_path, still_face, smiling_face) -> Path:
    frames = [{"timestamp": i / 30, "blendshapes": still_face} for i in range(5)]
    frames.append({"timestamp": 5 / 30, "blendshapes": None})
    frames += [{"timestamp": i / 30, "blendshapes": smiling_face} for i in range(6, 16)]
    path = tmp_path / "frames.json"
    path.write_text(json.dumps(frames), encoding="utf-8")
    return path
