"""
UI Components - Rich renderables for pipeline results.

This module turns search results, detail records, episode references and
stream results into tables and panels styled with the active palette.
"""

from typing import Any, Dict, List, Optional

from rich.align import Align
from rich.box import MINIMAL, ROUNDED, SIMPLE, Box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from kaiscrape.core.models import DetailRecord, EpisodeRef, SearchResult, StreamResult
from kaiscrape.plugins.common import URLHelper
from kaiscrape.ui.console import get_console
from kaiscrape.ui.themes import get_palette


TABLE_BOXES: Dict[str, Box] = {
    "rounded": ROUNDED,
    "simple": SIMPLE,
    "minimal": MINIMAL,
}


class UIComponents:
    """Collection of standardized UI components with consistent styling."""

    def __init__(self, table_style: str = "rounded"):
        """
        Initialize UI components with current theme.

        Args:
            table_style: Box style for tables (``rounded``, ``simple`` or ``minimal``)
        """
        self.console = get_console()
        self.palette = get_palette()
        self.box = TABLE_BOXES.get(table_style, ROUNDED)

    def create_panel(
        self,
        content: Any,
        title: Optional[str] = None,
        border_style: Optional[str] = None,
        padding: tuple = (1, 2),
        expand: bool = True
    ) -> Panel:
        """Create a styled panel with consistent theming."""
        return Panel(
            content,
            title=title,
            border_style=border_style or self.palette.border_primary,
            padding=padding,
            expand=expand
        )

    def create_info_panel(self, content: Any, title: str = "ℹ️  Information") -> Panel:
        """Create an information panel with info styling."""
        return self.create_panel(
            content,
            title=f"[{self.palette.info}]{title}[/{self.palette.info}]",
            border_style=self.palette.info
        )

    def _table(self, title: str) -> Table:
        return Table(
            title=title,
            box=self.box,
            show_header=True,
            header_style=f"bold {self.palette.secondary}",
            border_style=self.palette.border_primary,
            expand=True
        )

    def create_search_results_table(self, results: List[SearchResult]) -> Table:
        """
        Create a table displaying search results.

        Error placeholders are shown with their message instead of a URL.
        """
        table = self._table("🔍 Search Results")

        table.add_column("#", style="dim", width=4)
        table.add_column("Title", style=self.palette.primary, min_width=30)
        table.add_column("Page", style=self.palette.secondary, overflow="fold")
        table.add_column("Poster", style=self.palette.muted, overflow="fold")

        for i, result in enumerate(results, 1):
            if URLHelper.is_error_sentinel(result.page_url):
                page = f"[{self.palette.error}]{URLHelper.sentinel_message(result.page_url)}[/{self.palette.error}]"
            else:
                page = result.page_url
            table.add_row(str(i), result.title, page, result.image_url)

        return table

    def create_episodes_table(self, episodes: List[EpisodeRef]) -> Table:
        """Create a table displaying episode references."""
        table = self._table(f"📺 Episodes ({len(episodes)})")

        table.add_column("Episode", style=f"bold {self.palette.accent}", width=8, justify="right")
        table.add_column("Link List Request", style=self.palette.secondary, overflow="fold")

        for episode in episodes:
            table.add_row(str(episode.number), episode.request_url)

        return table

    def create_details_panel(self, record: DetailRecord, page_url: str) -> Panel:
        """Create a panel showing an anime's description, aliases and air date."""
        grid = self.create_status_grid({
            "Aliases": record.aliases or "-",
            "Aired": record.airdate or "-",
            "Page": page_url,
        })

        body = Table.grid(padding=(1, 0))
        body.add_row(Text(record.description, style=self.palette.text))
        body.add_row(grid)

        return self.create_info_panel(body, title="📖 Details")

    def create_stream_panel(self, stream: StreamResult, episode_url: str) -> Panel:
        """Create a panel showing the resolved stream and subtitle URLs."""
        missing = f"[{self.palette.muted}]none[/{self.palette.muted}]"
        grid = self.create_status_grid({
            "Stream": stream.stream_url or missing,
            "Subtitles": stream.subtitle_url or missing,
            "Request": episode_url,
        })

        if stream.is_playable:
            title = f"[{self.palette.success}]▶️  Stream Resolved[/{self.palette.success}]"
            border = self.palette.success
        else:
            title = f"[{self.palette.warning}]⚠️  No Stream[/{self.palette.warning}]"
            border = self.palette.warning

        return self.create_panel(grid, title=title, border_style=border)

    def create_status_grid(self, status_items: Dict[str, Any]) -> Table:
        """Create a two-column key/value grid."""
        table = Table(
            show_header=False,
            box=None,
            expand=True,
            padding=(0, 1)
        )

        table.add_column("Key", style=f"bold {self.palette.secondary}", width=20)
        table.add_column("Value", style=self.palette.text, overflow="fold")

        for key, value in status_items.items():
            table.add_row(key, str(value))

        return table

    def create_banner(self, text: str, style: Optional[str] = None) -> Panel:
        """Create a centered banner panel."""
        banner_text = Text(text, style=style or f"bold {self.palette.primary}")

        return Panel(
            Align.center(banner_text),
            border_style=self.palette.border_primary,
            padding=(1, 2)
        )


# Export UI components
__all__ = ["UIComponents", "TABLE_BOXES"]
