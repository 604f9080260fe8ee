"""
Discord webhook notifications for completed links
"""
import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

import aiohttp

from .config import NotificationConfig
from .errors import NotificationError
from .logging_config import get_logger
from .models import LinkRecord

logger = get_logger("notifier")

ELLIPSIS = "..."
EMBED_COLOR = 0x0099FF


def truncate_text(text: Optional[str], max_length: int) -> str:
    """Cut text to max_length characters, ending in '...' when cut."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    if max_length <= len(ELLIPSIS):
        return ELLIPSIS[:max_length]
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


class DiscordNotifier:
    """Posts an embed for a link to every configured webhook.

    Webhooks are called concurrently; a failing webhook is logged and does
    not affect delivery to the others.
    """

    def __init__(self, webhook_urls: Optional[List[str]] = None,
                 config: Optional[NotificationConfig] = None):
        self.config = config or NotificationConfig()
        self.webhook_urls = list(webhook_urls if webhook_urls is not None else self.config.webhook_urls)

    async def send(self, link: LinkRecord) -> None:
        if not self.webhook_urls:
            logger.warning("No Discord webhooks configured, skipping notification for %s", link.id)
            return

        payload = {"embeds": [self.create_embed(link)]}

        async with aiohttp.ClientSession() as session:
            results = await asyncio.gather(
                *(self._send_to_webhook(session, url, payload) for url in self.webhook_urls),
                return_exceptions=True,
            )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.error("Discord delivery failed: %d/%d webhooks", len(failures), len(self.webhook_urls))
            for failure in failures:
                logger.error("  %s", failure)
        else:
            logger.info("Sent notification for %s to %d webhook(s)", link.id, len(self.webhook_urls))

    def create_embed(self, link: LinkRecord) -> Dict[str, Any]:
        """Build a Discord embed with every text field cut to Discord's limits."""
        cfg = self.config
        data = link.to_notification_payload()
        tags = ", ".join(data["tags"]) if data["tags"] else "None"

        embed = {
            "title": truncate_text(data["title"] or "No Title", cfg.title_limit),
            "description": truncate_text(data["summary"] or "No Summary Available", cfg.description_limit),
            "url": data["url"],
            "color": EMBED_COLOR,
            "fields": [
                {"name": "Tags", "value": truncate_text(tags, cfg.field_limit), "inline": True},
                {"name": "Added", "value": self.format_date(data["created_at"]), "inline": True},
            ],
            "timestamp": data["created_at"].isoformat(),
            "footer": {"text": truncate_text(cfg.footer_text, cfg.footer_limit)},
        }
        if data["image"]:
            embed["thumbnail"] = {"url": data["image"]}
        return embed

    @staticmethod
    def format_date(value: datetime) -> str:
        return value.strftime("%Y-%m-%d %H:%M")

    async def _send_to_webhook(self, session: aiohttp.ClientSession, webhook_url: str,
                               payload: Dict[str, Any]) -> None:
        try:
            async with session.post(webhook_url, json=payload) as response:
                if response.status >= 400:
                    raise NotificationError(
                        f"Webhook {webhook_url} returned {response.status} {response.reason}"
                    )
        except aiohttp.ClientError as e:
            raise NotificationError(f"Webhook {webhook_url} request failed: {e}") from e
