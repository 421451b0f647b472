import settings


def test_env_int_parses_and_falls_back(monkeypatch):
    monkeypatch.setenv("BLOOM_TEST_INT", "42")
    assert settings._get_env_int("BLOOM_TEST_INT", 7) == 42
    monkeypatch.setenv("BLOOM_TEST_INT", "forty-two")
    assert settings._get_env_int("BLOOM_TEST_INT", 7) == 7
    monkeypatch.setenv("BLOOM_TEST_INT", "  ")
    assert settings._get_env_int("BLOOM_TEST_INT", 7) == 7
    monkeypatch.delenv("BLOOM_TEST_INT")
    assert settings._get_env_int("BLOOM_TEST_INT", 7) == 7


def test_env_float_parses_and_falls_back(monkeypatch):
    monkeypatch.setenv("BLOOM_TEST_FLOAT", "0.25")
    assert settings._get_env_float("BLOOM_TEST_FLOAT", 0.5) == 0.25
    monkeypatch.setenv("BLOOM_TEST_FLOAT", "abc")
    assert settings._get_env_float("BLOOM_TEST_FLOAT", 0.5) == 0.5


def test_fp_rate_must_be_a_probability(monkeypatch):
    monkeypatch.setenv("BLOOM_TEST_P", "1.5")
    assert settings._fp_rate("BLOOM_TEST_P", 0.01) == 0.01
    monkeypatch.setenv("BLOOM_TEST_P", "0")
    assert settings._fp_rate("BLOOM_TEST_P", 0.01) == 0.01
    monkeypatch.setenv("BLOOM_TEST_P", "0.001")
    assert settings._fp_rate("BLOOM_TEST_P", 0.01) == 0.001


def test_defaults_are_sane():
    assert 0.0 < settings.DEFAULT_FP_RATE < 1.0
    assert settings.KEY_BYTES_MIN <= settings.KEY_BYTES <= settings.KEY_BYTES_MAX
