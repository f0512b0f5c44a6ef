import pytest

TEST_CONFIG="""# bitcoin.conf for tests
server=1
rpcconnect=127.0.0.1:8332
rpcuser=alice
rpcpassword=s3cr3t
"""

@pytest.fixture(autouse=True)
def _isolate_env(tmp_path, monkeypatch):
    # Fake HOME and an empty working directory so no real bitcoin.conf is found
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.delenv("REALM_CONFIG", raising=False)

    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield

@pytest.fixture
def fake_home(tmp_path):
    return tmp_path / "home"

@pytest.fixture
def home_config(fake_home):
    """Create ~/.bitcoin/bitcoin.conf with complete credentials."""
    path = fake_home / ".bitcoin" / "bitcoin.conf"
    path.parent.mkdir()
    path.write_text(TEST_CONFIG, encoding="utf-8")
    return path
