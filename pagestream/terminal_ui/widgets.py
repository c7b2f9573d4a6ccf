from datetime import datetime

from textual.containers import Horizontal
from textual.widgets import Label, ListItem, Static

from pagestream.constants import LOADING_ROW_TEXT
from pagestream.pagination.controller import FetchState, PaginationSnapshot


class ItemRow(ListItem):
    """Row showing one downloaded item"""

    def __init__(self, index: int, item: str, **kwargs):
        self.row_index = index
        self.item = item
        super().__init__(Label(f"{index + 1:>4}  {item}"), **kwargs)


class LoadingRow(ListItem):
    """The load-more sentinel row"""

    def __init__(self, **kwargs):
        super().__init__(Label(f"      [dim]{LOADING_ROW_TEXT}[/]"), **kwargs)
        self.add_class("loading-row")


class ChannelHeader(Static):
    """Header showing the list title and download progress"""

    def __init__(self, channel_name: str, **kwargs):
        super().__init__(**kwargs)
        self.channel_name = channel_name
        self.last_refresh = datetime.now()
        self.loaded = 0
        self.state = FetchState.IDLE

    def compose(self):
        yield Horizontal(
            Static(self._get_box_art(), id="channel-box"),
            Static(self._get_info_text(), id="refresh-info"),
        )

    def _get_box_art(self) -> str:
        box_width = len(self.channel_name) + 10
        top_line = f"╔{'═' * box_width}╗"
        middle_line = f"║     {self.channel_name.upper()}     ║"
        bottom_line = f"╚{'═' * box_width}╝"
        return f"{top_line}\n{middle_line}\n{bottom_line}"

    def _get_info_text(self) -> str:
        refresh_text = f"Last updated: {self.last_refresh.strftime('%H:%M:%S')}"
        if self.state is FetchState.EXHAUSTED:
            progress = f"[bold green]All {self.loaded} items loaded[/]"
        elif self.state is FetchState.HALTED:
            progress = f"{self.loaded} items, [bold red]stopped[/]"
        else:
            progress = f"{self.loaded} items"
        return f"{refresh_text}\n{progress}"

    def update_progress(self, snapshot: PaginationSnapshot) -> None:
        self.loaded = len(snapshot.items)
        self.state = snapshot.state
        self.last_refresh = datetime.now()
        self.query_one("#refresh-info", Static).update(self._get_info_text())
