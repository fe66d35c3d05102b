"""
Configuration Tests

Tests for RelayConfig validation, YAML persistence and environment overrides.
"""

import pytest


class TestRelayConfig:
    """Test RelayConfig defaults and validation."""
    
    def test_defaults(self):
        from jointrelay.config import RelayConfig
        
        config = RelayConfig()
        
        assert config.listen_ip == "0.0.0.0"
        assert config.dest_host == "127.0.0.1"
        assert config.listen_port is None
        assert config.dest_port is None
        assert config.joints == []
        assert config.hands is False
        assert config.poll_interval > 0
    
    def test_check_required_missing_both(self):
        from jointrelay.config import RelayConfig
        from jointrelay.errors import ConfigurationError
        
        with pytest.raises(ConfigurationError, match="listen_port, write_port"):
            RelayConfig().check_required()
    
    def test_check_required_missing_write_port(self):
        from jointrelay.config import RelayConfig
        from jointrelay.errors import ConfigurationError
        
        with pytest.raises(ConfigurationError, match="write_port"):
            RelayConfig(listen_port=7110).check_required()
    
    def test_check_required_ok(self, make_config):
        make_config().check_required()
    
    def test_port_range_validated(self):
        from pydantic import ValidationError
        from jointrelay.config import RelayConfig
        
        with pytest.raises(ValidationError):
            RelayConfig(listen_port=70000, dest_port=7111)
        with pytest.raises(ValidationError):
            RelayConfig(listen_port=7110, dest_port=0)
    
    def test_log_level_normalized(self):
        from jointrelay.config import RelayConfig
        
        assert RelayConfig(log_level="debug").log_level == "DEBUG"
        assert RelayConfig(log_level="warning").log_level == "WARN"
    
    def test_bad_log_level(self):
        from pydantic import ValidationError
        from jointrelay.config import RelayConfig
        
        with pytest.raises(ValidationError):
            RelayConfig(log_level="chatty")
    
    def test_env_override(self, monkeypatch):
        from jointrelay.config import RelayConfig
        
        monkeypatch.setenv("JOINTRELAY_LISTEN_PORT", "7110")
        monkeypatch.setenv("JOINTRELAY_DEST_HOST", "10.0.0.5")
        monkeypatch.setenv("JOINTRELAY_JOINTS", '["head", "neck"]')
        
        config = RelayConfig()
        
        assert config.listen_port == 7110
        assert config.dest_host == "10.0.0.5"
        assert config.joints == ["head", "neck"]


class TestConfigFile:
    """Test YAML load/save."""
    
    def test_save_and_load(self, tmp_path):
        from jointrelay.config import RelayConfig
        
        path = tmp_path / "sub" / "relay.yaml"
        RelayConfig(listen_port=7110, dest_port=7111, joints=["l_hand"]).save(path)
        
        loaded = RelayConfig.load(path)
        
        assert loaded.listen_port == 7110
        assert loaded.dest_port == 7111
        assert loaded.joints == ["l_hand"]
    
    def test_overrides_win_over_file(self, tmp_path):
        from jointrelay.config import RelayConfig
        
        path = tmp_path / "relay.yaml"
        path.write_text("listen_port: 7110\ndest_port: 7111\njoints: [head]\n")
        
        config = RelayConfig.load(path, dest_port=9000, joints=None)
        
        assert config.listen_port == 7110
        assert config.dest_port == 9000
        assert config.joints == ["head"]
    
    def test_missing_default_file_gives_defaults(self):
        from jointrelay.config import RelayConfig
        
        config = RelayConfig.load()
        
        assert config.listen_port is None
    
    def test_missing_explicit_file(self, tmp_path):
        from jointrelay.config import RelayConfig
        from jointrelay.errors import ConfigurationError
        
        with pytest.raises(ConfigurationError, match="not found"):
            RelayConfig.load(tmp_path / "nope.yaml")
    
    def test_empty_file(self, tmp_path):
        from jointrelay.config import RelayConfig
        
        path = tmp_path / "relay.yaml"
        path.write_text("")
        
        assert RelayConfig.load(path).dest_port is None
    
    def test_non_mapping_file(self, tmp_path):
        from jointrelay.config import RelayConfig
        from jointrelay.errors import ConfigurationError
        
        path = tmp_path / "relay.yaml"
        path.write_text("- 7110\n- 7111\n")
        
        with pytest.raises(ConfigurationError, match="mapping"):
            RelayConfig.load(path)
    
    def test_invalid_yaml(self, tmp_path):
        from jointrelay.config import RelayConfig
        from jointrelay.errors import ConfigurationError
        
        path = tmp_path / "relay.yaml"
        path.write_text("listen_port: [7110\n")
        
        with pytest.raises(ConfigurationError):
            RelayConfig.load(path)
    
    def test_invalid_value_becomes_configuration_error(self, tmp_path):
        from jointrelay.config import RelayConfig
        from jointrelay.errors import ConfigurationError
        
        path = tmp_path / "relay.yaml"
        path.write_text("listen_port: not-a-port\n")
        
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            RelayConfig.load(path)
