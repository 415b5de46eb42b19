"""Configuration management for glyphwatch."""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .analyzer.domain import DEFAULT_PRIVATE_PREFIXES
from .analyzer.homoglyphs import DEFAULT_HOMOGLYPHS
from .analyzer.scripts import ConfigError, ScriptTag, build_script_table

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Default term lists. These can be overridden via config/heuristics.yaml or
# extended with config/keywords.txt and config/brands.txt without touching code.
DEFAULT_KEYWORDS: list[str] = [
    "urgent",
    "immediately",
    "verify",
    "verification",
    "suspend",
    "suspended",
    "expire",
    "confirm",
    "unauthorized",
    "alert",
    "locked",
    "restricted",
    "password",
    "login",
    "account",
    "security",
    "invoice",
    "payment",
    "refund",
]

DEFAULT_BRANDS: list[str] = [
    "paypal",
    "amazon",
    "apple",
    "microsoft",
    "google",
    "netflix",
    "chase",
    "wellsfargo",
    "citibank",
    "binance",
    "coinbase",
    "facebook",
    "instagram",
    "fedex",
    "dhl",
    "usps",
    "whatsapp",
    "telegram",
    "discord",
    "dropbox",
    "linkedin",
    "docusign",
]

DEFAULT_SCRIPT_RANGES: dict[str, list[list[int]]] = {
    "Latin": [[0x0041, 0x007A], [0x00C0, 0x00FF]],
    "Greek": [[0x0370, 0x03FF]],
    "Cyrillic": [[0x0400, 0x04FF]],
    "Armenian": [[0x0530, 0x058F]],
    "Hebrew": [[0x0590, 0x05FF]],
    "Arabic": [[0x0600, 0x06FF]],
}


@dataclass
class Config:
    """Engine configuration loaded from environment and config files."""

    # Paths
    config_dir: Path = field(default_factory=lambda: Path("./config"))

    # Checks
    mixed_script_check: bool = True
    text_mixed_script_check: bool = False
    brand_similarity_threshold: int = 85

    # Term lists
    keywords: list[str] = field(default_factory=lambda: list(DEFAULT_KEYWORDS))
    brands: list[str] = field(default_factory=lambda: list(DEFAULT_BRANDS))

    # Hosts that are never phishing targets
    private_prefixes: list[str] = field(default_factory=lambda: list(DEFAULT_PRIVATE_PREFIXES))

    # Lookalike -> Latin folding table
    homoglyphs: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HOMOGLYPHS))

    # Script name -> inclusive code-point intervals
    script_ranges: dict[str, list[list[int]]] = field(
        default_factory=lambda: {k: [list(r) for r in v] for k, v in DEFAULT_SCRIPT_RANGES.items()}
    )

    log_level: str = "INFO"

    def __post_init__(self):
        """Normalize paths and load extra term lists."""
        self.config_dir = Path(self.config_dir)
        self.keywords = _dedupe_lower(self.keywords)
        self.brands = _dedupe_lower(self.brands)
        self._load_lists()

    def _load_lists(self):
        """Append keywords.txt and brands.txt entries from the config dir."""
        keywords_path = self.config_dir / "keywords.txt"
        brands_path = self.config_dir / "brands.txt"

        if keywords_path.exists():
            self.keywords = _dedupe_lower(self.keywords + self._load_list_file(keywords_path))
        if brands_path.exists():
            self.brands = _dedupe_lower(self.brands + self._load_list_file(brands_path))

    @staticmethod
    def _load_list_file(path: Path) -> list[str]:
        """Load a list file, ignoring comments and empty lines."""
        items: list[str] = []
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#"):
                    items.append(line.lower())
        return items

    def script_table(self) -> tuple[ScriptTag, ...]:
        """Build the script range table, falling back to defaults on bad entries."""
        try:
            return build_script_table(self.script_ranges)
        except ConfigError as exc:
            logger.warning("Invalid script ranges, using defaults: %s", exc)
            return build_script_table(DEFAULT_SCRIPT_RANGES)


def _dedupe_lower(values) -> list[str]:
    items: list[str] = []
    for value in values or []:
        item = str(value or "").strip().lower()
        if item and item not in items:
            items.append(item)
    return items


def _load_heuristics(config_dir: Path) -> dict:
    """Load overrides from config/heuristics.yaml (optional)."""
    path = Path(config_dir or ".") / "heuristics.yaml"
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to parse heuristics.yaml: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring heuristics.yaml: top level must be a mapping")
        return {}

    def _coerce_terms(raw):
        if not isinstance(raw, list):
            return None
        items = _dedupe_lower(str(entry) for entry in raw if isinstance(entry, (str, int)))
        return items or None

    def _coerce_homoglyphs(raw):
        if not isinstance(raw, dict):
            return None
        table: dict[str, str] = {}
        for char, latin in raw.items():
            char, latin = str(char or ""), str(latin or "")
            if len(char) != 1 or not latin:
                logger.warning("Skipping homoglyph entry %r -> %r", char, latin)
                continue
            table[char.lower()] = latin.lower()
        return table or None

    def _coerce_scripts(raw):
        if not isinstance(raw, dict):
            return None
        ranges: dict[str, list] = {}
        for name, entries in raw.items():
            try:
                tag = build_script_table({name: entries})[0]
            except ConfigError as exc:
                logger.warning("Skipping script %r: %s", name, exc)
                continue
            ranges[tag.name] = [list(r) for r in tag.ranges]
        return ranges or None

    text_cfg = data.get("text") if isinstance(data.get("text"), dict) else {}
    domain_cfg = data.get("domain") if isinstance(data.get("domain"), dict) else {}

    return {
        "keywords": _coerce_terms(text_cfg.get("keywords")),
        "brands": _coerce_terms(text_cfg.get("brands")),
        "private_prefixes": _coerce_terms(domain_cfg.get("private_prefixes")),
        "homoglyphs": _coerce_homoglyphs(domain_cfg.get("homoglyphs")),
        "script_ranges": _coerce_scripts(data.get("scripts")),
    }


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> Config:
    """Load configuration from environment variables and config files."""
    load_dotenv()

    config_dir = Path(os.getenv("GLYPHWATCH_CONFIG_DIR", "./config"))
    heuristics = _load_heuristics(config_dir)

    kwargs: dict[str, object] = {}
    for key in ("keywords", "brands", "private_prefixes", "script_ranges"):
        if heuristics.get(key):
            kwargs[key] = heuristics[key]
    if heuristics.get("homoglyphs"):
        # Extends the built-in table rather than replacing it
        kwargs["homoglyphs"] = {**DEFAULT_HOMOGLYPHS, **heuristics["homoglyphs"]}

    prefixes_str = os.getenv("PRIVATE_HOST_PREFIXES", "")
    if prefixes_str.strip():
        kwargs["private_prefixes"] = [p.strip().lower() for p in prefixes_str.split(",") if p.strip()]

    try:
        threshold = int(os.getenv("BRAND_SIMILARITY_THRESHOLD", "85"))
    except ValueError:
        logger.warning("BRAND_SIMILARITY_THRESHOLD is not an integer; using 85")
        threshold = 85

    return Config(
        config_dir=config_dir,
        mixed_script_check=_env_bool("MIXED_SCRIPT_CHECK", "true"),
        text_mixed_script_check=_env_bool("TEXT_MIXED_SCRIPT_CHECK", "false"),
        brand_similarity_threshold=threshold,
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        **kwargs,
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of error messages."""
    errors: list[str] = []
    if not config.keywords and not config.brands:
        errors.append("At least one keyword or brand is required for text checks")
    if not config.script_ranges:
        errors.append("Script range table is empty")
    else:
        try:
            build_script_table(config.script_ranges)
        except ConfigError as exc:
            errors.append(f"Invalid script ranges: {exc}")
    if not 0 <= config.brand_similarity_threshold <= 100:
        errors.append("BRAND_SIMILARITY_THRESHOLD must be between 0 and 100")
    if logging.getLevelName(config.log_level) == f"Level {config.log_level}":
        errors.append(f"Unknown LOG_LEVEL: {config.log_level}")
    return errors


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for a host process embedding the engines."""
    resolved = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
    # basicConfig is a no-op once the host has handlers; the package level still applies
    logging.getLogger("glyphwatch").setLevel(resolved)
