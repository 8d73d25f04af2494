from pathlib import Path

import pytest

from devpost_stats.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    # Keep config discovery away from the developer's working directory.
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    return tmp_path


@pytest.fixture
def write_csv(tmp_path):
    def _write(text: str, name: str = "submissions.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


DEVPOST_CSV = "\n".join(
    [
        '"Submission Title","Desired Prizes","College/Universities Of Team Members","Built With"',
        '"Plant Pal","Best UI, Best Hack","Ohio State University","React, Node"',
        '"Queue Less","Best Hack","Ohio State University, Kent State University","Python, React"',
        '"Late Entry","","Kent State University",""',
        "",
    ]
)


@pytest.fixture
def devpost_csv(write_csv):
    return write_csv(DEVPOST_CSV)
