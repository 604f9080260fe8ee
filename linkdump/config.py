"""
Configuration management for linkdump
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import yaml


@dataclass
class ClassifierConfig:
    """Content classification settings"""
    summarize_threshold: int = 200
    social_domains: List[str] = field(default_factory=lambda: [
        "twitter.com", "x.com", "facebook.com", "instagram.com",
        "tiktok.com", "snapchat.com", "reddit.com", "discord.com",
        "telegram.org", "whatsapp.com", "threads.net",
    ])
    video_domains: List[str] = field(default_factory=lambda: [
        "youtube.com", "youtu.be", "vimeo.com", "twitch.tv",
        "netflix.com", "disney.com", "hulu.com",
    ])


@dataclass
class ScraperConfig:
    """Page fetching settings"""
    timeout: float = 10.0
    user_agent: str = "LinkDump Bot 1.0"
    content_chars: int = 1000


@dataclass
class SummarizerConfig:
    """AI summary generation settings"""
    max_tokens: int = 300
    temperature: float = 0.3
    max_chars: int = 400


@dataclass
class NotificationConfig:
    """Webhook notification settings (limits follow Discord embed rules)"""
    webhook_urls: List[str] = field(default_factory=list)
    title_limit: int = 256
    description_limit: int = 4096
    field_limit: int = 1024
    footer_limit: int = 2048
    footer_text: str = "LinkDump Bot"


@dataclass
class StorageConfig:
    """Persistence settings"""
    data_dir: str = "data"
    links_file: str = "links.json"

    @property
    def links_path(self) -> Path:
        return Path(self.data_dir) / self.links_file


@dataclass
class QueueConfig:
    """Background queue settings"""
    poll_interval: float = 0.1


@dataclass
class LLMConfig:
    """LLM provider settings"""
    provider: str = "litellm"
    model: str = "openrouter/openai/gpt-4o-mini"
    api_key_env: str = "LLM_API_KEY"
    timeout: int = 30

    @property
    def api_key(self) -> str:
        return os.getenv(self.api_key_env, "")


_SECTIONS = {
    "classifier": ["summarize_threshold", "social_domains", "video_domains"],
    "scraper": ["timeout", "user_agent", "content_chars"],
    "summarizer": ["max_tokens", "temperature", "max_chars"],
    "notification": ["webhook_urls", "title_limit", "description_limit",
                     "field_limit", "footer_limit", "footer_text"],
    "storage": ["data_dir", "links_file"],
    "queue": ["poll_interval"],
    "llm": ["provider", "model", "api_key_env", "timeout"],
}


@dataclass
class Config:
    """Main configuration class for linkdump"""
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    scraper: ScraperConfig = field(default_factory=ScraperConfig)
    summarizer: SummarizerConfig = field(default_factory=SummarizerConfig)
    notification: NotificationConfig = field(default_factory=NotificationConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)

    _instance: Optional["Config"] = field(default=None, init=False, repr=False)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from YAML file or use defaults.

        Args:
            config_path: Path to config file. Defaults to config.yaml in the working directory.

        Returns:
            Config instance with loaded or default settings, with
            DISCORD_WEBHOOK_URLS merged into the notification webhooks.
        """
        if config_path is None:
            config_path = Path("config.yaml")

        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            config = cls._from_dict(data)
        else:
            config = cls()

        config._apply_env()
        return config

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        for section, keys in _SECTIONS.items():
            section_data = data.get(section) or {}
            target = getattr(config, section)
            for key in keys:
                if key in section_data:
                    setattr(target, key, section_data[key])

        return config

    def _apply_env(self) -> None:
        webhooks = os.getenv("DISCORD_WEBHOOK_URLS", "")
        for url in (w.strip() for w in webhooks.split(",")):
            if url and url not in self.notification.webhook_urls:
                self.notification.webhook_urls.append(url)

    @classmethod
    def get_instance(cls, config_path: Optional[Path] = None) -> "Config":
        """Get singleton instance of Config.

        Args:
            config_path: Path to config file (only used on first call).
        """
        if cls._instance is None:
            cls._instance = cls.load(config_path)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton instance (useful for testing)."""
        cls._instance = None


def get_config(config_path: Optional[Path] = None) -> Config:
    """Convenience function to get config singleton."""
    return Config.get_instance(config_path)
