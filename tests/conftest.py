import pytest


@pytest.fixture
def write_file(tmp_path):
    """Write a file below tmp_path, creating parent directories."""
    def _write(relative_path, content):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write
