"""Configuration loader for compile_news."""

from dataclasses import dataclass, field
from pathlib import Path

from common.config import ConfigSingleton, find_config_path, load_yaml

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"

DEFAULT_NO_AFFILIATION_NAMES = [
    "nonpartisan",
    "non-partisan",
    "independent",
    "unaffiliated",
    "no party preference",
    "no party affiliation",
    "none",
]


@dataclass
class HttpConfig:
    connect_timeout: float = 1.0
    read_timeout: float = 1.0
    user_agent: str = "compile-news/1.0 (candidate news compiler)"

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


@dataclass
class PolitenessConfig:
    max_crawl_delay: float = 30.0
    user_agent_token: str = "*"


@dataclass
class SearchConfig:
    endpoint: str = "https://www.googleapis.com/customsearch/v1"
    max_results: int = 10


@dataclass
class RelevanceConfig:
    candidate_threshold: float = 0.5
    party_threshold: float = 0.1
    no_affiliation_names: list[str] = field(
        default_factory=lambda: list(DEFAULT_NO_AFFILIATION_NAMES)
    )
    spacy_model: str = "en_core_web_sm"


@dataclass
class ProcessingConfig:
    max_word_count: int = 100
    summary_sentence_count: int = 3
    similarity_threshold: float = 0.2
    damping_factor: float = 0.1
    max_iterations: int = 100
    convergence_tolerance: float = 0.0001
    spacy_model: str = "en_core_web_sm"


@dataclass
class StorageConfig:
    store_unprocessed: bool = False
    output_dir: str = "output"
    s3_prefix: str = "news_articles"


@dataclass
class CompileNewsConfig:
    http: HttpConfig = field(default_factory=HttpConfig)
    politeness: PolitenessConfig = field(default_factory=PolitenessConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    relevance: RelevanceConfig = field(default_factory=RelevanceConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def parse_config(data: dict | None) -> CompileNewsConfig:
    """Parse config dictionary into a CompileNewsConfig, defaulting missing keys."""
    data = data or {}
    return CompileNewsConfig(
        http=HttpConfig(**data.get("http", {})),
        politeness=PolitenessConfig(**data.get("politeness", {})),
        search=SearchConfig(**data.get("search", {})),
        relevance=RelevanceConfig(**data.get("relevance", {})),
        processing=ProcessingConfig(**data.get("processing", {})),
        storage=StorageConfig(**data.get("storage", {})),
    )


def load_config(config_name: str | None = None) -> CompileNewsConfig:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension) or a path
                    to a YAML file. If None, uses COMPILE_NEWS_CONFIG env var
                    or "prod".

    Returns:
        Loaded CompileNewsConfig object
    """
    path = find_config_path(config_name, CONFIG_DIR, env_var="COMPILE_NEWS_CONFIG")
    return parse_config(load_yaml(path))


_manager: ConfigSingleton[CompileNewsConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
