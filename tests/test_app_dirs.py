from frz.app_dirs import get_cache_dir, get_config_dir, get_data_dir


def test_config_dir_environment_override(tmp_path, monkeypatch):
    monkeypatch.setenv("FRZ_CONFIG_DIR", str(tmp_path))
    assert get_config_dir() == tmp_path


def test_data_dir_environment_override(tmp_path, monkeypatch):
    monkeypatch.setenv("FRZ_DATA_DIR", str(tmp_path))
    assert get_data_dir() == tmp_path


def test_cache_dir_environment_override(tmp_path, monkeypatch):
    monkeypatch.setenv("FRZ_CACHE_DIR", str(tmp_path))
    assert get_cache_dir() == tmp_path


def test_config_dir_empty_value_falls_back(monkeypatch):
    monkeypatch.setenv("FRZ_CONFIG_DIR", "")
    path = get_config_dir()
    assert path.is_absolute()
    assert "frz" in path.parts


def test_data_dir_empty_value_falls_back(monkeypatch):
    monkeypatch.setenv("FRZ_DATA_DIR", "")
    path = get_data_dir()
    assert path.is_absolute()
    assert "frz" in path.parts


def test_cache_dir_empty_value_falls_back(monkeypatch):
    monkeypatch.setenv("FRZ_CACHE_DIR", "")
    path = get_cache_dir()
    assert path.is_absolute()
    assert "frz" in path.parts


def test_config_dir_empty_and_unset_agree(monkeypatch):
    monkeypatch.setenv("FRZ_CONFIG_DIR", "")
    fallback = get_config_dir()
    monkeypatch.delenv("FRZ_CONFIG_DIR")
    assert get_config_dir() == fallback


def test_data_dir_empty_and_unset_agree(monkeypatch):
    monkeypatch.setenv("FRZ_DATA_DIR", "")
    fallback = get_data_dir()
    monkeypatch.delenv("FRZ_DATA_DIR")
    assert get_data_dir() == fallback


def test_cache_dir_empty_and_unset_agree(monkeypatch):
    monkeypatch.setenv("FRZ_CACHE_DIR", "")
    fallback = get_cache_dir()
    monkeypatch.delenv("FRZ_CACHE_DIR")
    assert get_cache_dir() == fallback


def test_directories_are_distinct(monkeypatch):
    for env_name in ("FRZ_CONFIG_DIR", "FRZ_DATA_DIR", "FRZ_CACHE_DIR"):
        monkeypatch.delenv(env_name, raising=False)
    assert not get_cache_dir() == get_config_dir()
    assert get_cache_dir().is_absolute()