"""Unit tests for configuration."""

from pathlib import Path

from manifix.core.config import BuildConfig, Config, get_config


class TestBuildConfig:
    """Tests for derived build configuration properties."""

    def test_defaults(self):
        """Test that the default build is bundled and unfinalized."""
        build = BuildConfig()
        assert build.unbundled_build_apps == []
        assert not build.platform_sdk_final
        assert build.platform_sdk_codename in build.platform_version_active_codenames
        assert not build.use_api_fingerprint

    def test_use_api_fingerprint(self):
        """Test the conditions for API fingerprinting.

        Fingerprinting needs an unbundled build from source with the
        fingerprint option turned on.
        """
        on = {"unbundled_build": True, "target_sdk_with_api_fingerprint": True}
        assert BuildConfig(**on).use_api_fingerprint
        assert not BuildConfig(**on, always_use_prebuilt_sdks=True).use_api_fingerprint
        assert not BuildConfig(target_sdk_with_api_fingerprint=True).use_api_fingerprint

    def test_api_fingerprint_path(self):
        """Test that the fingerprint lives in the build intermediates."""
        build = BuildConfig(soong_out_dir=Path("/tmp/out/soong"))
        assert build.api_fingerprint_path == Path("/tmp/out/soong/api_fingerprint.txt")


class TestConfigFromEnv:
    """Tests for environment overrides."""

    def test_unbundled_apps(self, monkeypatch, clean_config_cache):
        """Test that TARGET_BUILD_APPS makes the build unbundled."""
        monkeypatch.setenv("TARGET_BUILD_APPS", "Settings  Launcher3")
        monkeypatch.delenv("TARGET_BUILD_UNBUNDLED", raising=False)
        config = Config.from_env()
        assert config.build.unbundled_build_apps == ["Settings", "Launcher3"]
        assert config.build.unbundled_build

    def test_platform_and_tools(self, monkeypatch, clean_config_cache):
        """Test platform SDK and tool overrides."""
        monkeypatch.setenv("PLATFORM_SDK_CODENAME", "Baklava")
        monkeypatch.setenv("PLATFORM_SDK_VERSION", "35")
        monkeypatch.setenv("PLATFORM_SDK_FINAL", "true")
        monkeypatch.delenv("PLATFORM_VERSION_ACTIVE_CODENAMES", raising=False)
        monkeypatch.setenv("MANIFEST_FIXER_CMD", "out/host/bin/manifest_fixer")
        monkeypatch.setenv("MANIFIX_LOG_LEVEL", "DEBUG")

        config = get_config()
        assert config.log_level == "DEBUG"
        assert config.build.platform_sdk_codename == "Baklava"
        assert config.build.platform_sdk_version == 35
        assert config.build.platform_sdk_final
        assert config.build.platform_version_active_codenames == ["Baklava"]
        assert config.tools.manifest_fixer_cmd == "out/host/bin/manifest_fixer"
        assert get_config() is config
