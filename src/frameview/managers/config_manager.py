"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and builds typed settings and the product catalog.
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml

from frameview.models.config import APISettings, TerminalSettings, ViewerSettings
from frameview.models.enums import LogLevel
from frameview.models.product import ProductConfig
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

PACKAGE_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes the include: directive to load modular YAML
    files. Falls back to factory defaults when loading fails.

    Example:
        config = ConfigManager()
        config.load()

        config.viewer_settings.total_frames      # 24
        product = config.get_product("tank-300")
        products = config.list_products()
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Args:
            config_path: Path to main config.yaml (relative paths resolve against the package)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict = {}

        self.viewer_settings = ViewerSettings()
        self.api_settings = APISettings()
        self.terminal_settings = TerminalSettings()
        self._products: Dict[str, ProductConfig] = {}

    @staticmethod
    def _resolve(path: Path) -> Path:
        return path if path.is_absolute() else PACKAGE_DIR / path

    def load(self) -> Dict:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory_defaults.yaml on failure
        5. Build typed settings and product catalog

        Returns:
            Merged config data dict
        """
        full_path = self._resolve(self.config_path)
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if 'include' in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config['include'], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            with open(self._resolve(self.factory_defaults_path), "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}

        self._build_settings()
        return self.data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: Filenames to load (e.g., ["viewer.yaml", "products.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except yaml.YAMLError as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    def _build_settings(self) -> None:
        self.viewer_settings = ViewerSettings.from_dict(self.data.get("viewer") or {})
        self.api_settings = APISettings.from_dict(self.data.get("api") or {})
        self.terminal_settings = TerminalSettings.from_dict(self.data.get("terminal") or {})

        self._products = {}
        for product_id, product_data in (self.data.get("products") or {}).items():
            try:
                self._products[product_id] = ProductConfig.from_dict(product_id, product_data or {})
            except (KeyError, ValueError, TypeError) as ex:
                log.error(f"Skipping invalid product '{product_id}'", error=str(ex))

        log.info(
            "Configuration ready",
            products=len(self._products),
            base_url=self.viewer_settings.base_url,
            total_frames=self.viewer_settings.total_frames
        )

    # ============================================================
    # Accessors
    # ============================================================

    @property
    def log_level(self) -> LogLevel:
        name = str((self.data.get("logging") or {}).get("level", "INFO")).upper()
        return LogLevel.__members__.get(name, LogLevel.INFO)

    @property
    def log_colors(self) -> bool:
        return bool((self.data.get("logging") or {}).get("colors", True))

    def get_product(self, product_id: str) -> Optional[ProductConfig]:
        return self._products.get(product_id)

    def list_products(self) -> List[ProductConfig]:
        return list(self._products.values())

    def add_product(self, product: ProductConfig) -> None:
        """Register a product at runtime (tests, embedding)."""
        self._products[product.id] = product
