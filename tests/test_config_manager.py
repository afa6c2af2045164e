import textwrap

import pytest

from frameview.managers.config_manager import ConfigManager
from frameview.models.enums import LogLevel


def write(path, content):
    path.write_text(textwrap.dedent(content), encoding="utf-8")


@pytest.fixture
def config_dir(tmp_path):
    write(tmp_path / "config.yaml", """
        include:
          - viewer.yaml
          - products.yaml
    """)
    write(tmp_path / "viewer.yaml", """
        viewer:
          base_url: "https://cdn.test/360"
          total_frames: 12
          drag_sensitivity: 1.0
          max_concurrent_loads: 4
        api:
          port: 9000
        terminal:
          enabled: true
          product_id: tank-300
          color_id: orange
        logging:
          level: debug
          colors: false
    """)
    write(tmp_path / "products.yaml", """
        products:
          tank-300:
            name: "TANK 300"
            colors:
              - id: orange
                name: Orange
                hex: "#E2661C"
              - id: grey
                name: Grey
                hex: "#777777"
                explicitFrames: [0, 2, 4]
          broken:
            name: "No colors"
            colors: []
    """)
    write(tmp_path / "defaults.yaml", """
        viewer:
          total_frames: 24
        products: {}
    """)
    return tmp_path


class TestConfigManager:
    def test_include_based_config(self, config_dir):
        config = ConfigManager(config_dir / "config.yaml", config_dir / "defaults.yaml")
        config.load()

        assert config.viewer_settings.base_url == "https://cdn.test/360"
        assert config.viewer_settings.total_frames == 12
        assert config.viewer_settings.drag_sensitivity == 1.0
        assert config.viewer_settings.max_concurrent_loads == 4
        assert config.api_settings.port == 9000
        assert config.api_settings.host == "0.0.0.0"
        assert config.terminal_settings.enabled
        assert config.log_level == LogLevel.DEBUG
        assert config.log_colors is False

    def test_products(self, config_dir):
        config = ConfigManager(config_dir / "config.yaml", config_dir / "defaults.yaml")
        config.load()

        product = config.get_product("tank-300")
        assert product.color_ids == ["orange", "grey"]
        assert product.get_color("grey").explicit_frames == (0, 2, 4)
        assert not product.get_color("orange").has_explicit_frames
        # Invalid products are skipped
        assert config.get_product("broken") is None
        assert [p.id for p in config.list_products()] == ["tank-300"]

    def test_falls_back_to_defaults(self, config_dir):
        config = ConfigManager(config_dir / "missing.yaml", config_dir / "defaults.yaml")
        config.load()

        assert config.viewer_settings.total_frames == 24
        assert config.list_products() == []
        assert config.log_level == LogLevel.INFO

    def test_missing_include_falls_back(self, config_dir):
        write(config_dir / "config.yaml", """
            include:
              - nope.yaml
        """)
        config = ConfigManager(config_dir / "config.yaml", config_dir / "defaults.yaml")
        config.load()

        assert config.viewer_settings.total_frames == 24

    def test_monolithic_config(self, tmp_path):
        write(tmp_path / "config.yaml", """
            viewer:
              total_frames: 36
            products:
              haval-h6:
                colors:
                  - id: blue
                    hex: "#1F3C74"
        """)
        config = ConfigManager(tmp_path / "config.yaml", tmp_path / "config.yaml")
        config.load()

        assert config.viewer_settings.total_frames == 36
        assert config.get_product("haval-h6").name == "haval-h6"

    def test_packaged_config(self):
        config = ConfigManager()
        config.load()

        assert config.get_product("tank-300") is not None
        assert config.get_product("haval-h6").total_frames == 36
        grey = config.get_product("tank-500").get_color("grey")
        assert grey.explicit_frames == tuple(range(0, 24, 2))
