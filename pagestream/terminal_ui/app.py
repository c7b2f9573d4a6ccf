from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, ListView

from pagestream.core.config import Settings, settings as default_settings
from pagestream.core.container import create_controller, create_page_client
from pagestream.core.logging import LogContext
from pagestream.pagination.controller import PaginationController, PaginationSnapshot
from pagestream.terminal_ui.binding import ListBinding
from pagestream.terminal_ui.widgets import ChannelHeader, ItemRow, LoadingRow

logger = LogContext(__name__)


class PagerApp(App):
    """Endless list that pulls the next page when the loading row comes into view"""

    CSS = """
    #channel-header { height: 4; }
    #items { height: 1fr; }
    .loading-row { color: $text-muted; }
    """
    BINDINGS = [
        Binding(key="q", action="quit", description="quit"),
        Binding(key="r", action="reset", description="reset"),
        Binding(key="m", action="load_more", description="load more"),
        Binding(key="j", action="move_down", description="down", show=False),
        Binding(key="k", action="move_up", description="up", show=False),
    ]

    def __init__(self, settings: Settings = default_settings, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.app_settings = settings
        self.page_client = None
        self.controller: PaginationController[str] | None = None
        self.list_binding: ListBinding[str] | None = None
        self._rendered = 0
        self._sentinel: LoadingRow | None = None
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        """create child widgets for app"""
        yield Container(
            ChannelHeader(
                f"{self.app_settings.PAGINATION_MODE} pagination",
                id="channel-header",
            ),
            ListView(id="items"),
            id="main-container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        """Start the pagination session"""
        self.page_client = create_page_client(self.app_settings)
        self.controller = create_controller(
            self.page_client, on_error=self.report_error, settings=self.app_settings
        )
        self.list_binding = ListBinding(self.controller)
        logger.info(
            "Pagination session started",
            extra={
                "session_id": self.controller.session_id,
                "mode": self.app_settings.PAGINATION_MODE,
                "page_size": self.app_settings.PAGE_SIZE,
            },
        )

        list_view = self.query_one("#items", ListView)
        self.watch(list_view, "scroll_y", self._on_scroll, init=False)
        self._unsubscribe = self.controller.subscribe(self.on_snapshot)

    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        if self.controller is not None:
            self.controller.close()
        if self.page_client is not None:
            await self.page_client.close()

    def on_snapshot(self, snapshot: PaginationSnapshot) -> None:
        self.call_later(self.sync_rows, snapshot)

    async def sync_rows(self, snapshot: PaginationSnapshot) -> None:
        """Bring the list in line with the latest snapshot"""
        list_view = self.query_one("#items", ListView)

        if len(snapshot.items) < self._rendered:
            await list_view.clear()
            self._rendered = 0
            self._sentinel = None

        if self._sentinel is not None:
            await self._sentinel.remove()
            self._sentinel = None

        new_rows = [
            ItemRow(self._rendered + i, item)
            for i, item in enumerate(snapshot.items[self._rendered :])
        ]
        if new_rows:
            await list_view.extend(new_rows)
        self._rendered = len(snapshot.items)

        if snapshot.show_sentinel:
            self._sentinel = LoadingRow()
            await list_view.append(self._sentinel)

        self.query_one("#channel-header", ChannelHeader).update_progress(snapshot)
        self.call_after_refresh(self.check_sentinel)

    def check_sentinel(self) -> None:
        """Pull the next page if the loading row is on screen"""
        if self._sentinel is None or self.list_binding is None:
            return
        list_view = self.query_one("#items", ListView)
        if list_view.scroll_y >= list_view.max_scroll_y:
            self.list_binding.sentinel_visible()

    def _on_scroll(self, _scroll_y: float) -> None:
        self.check_sentinel()

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        if event.item is not None and event.item is self._sentinel and self.list_binding:
            self.list_binding.sentinel_visible()

    def report_error(self, error: Exception) -> None:
        self.notify(f"Could not load more items: {error}", severity="error")

    def action_reset(self) -> None:
        if self.controller is not None:
            self.controller.reset()

    def action_load_more(self) -> None:
        if self.list_binding is not None:
            self.list_binding.sentinel_visible()

    def action_move_down(self) -> None:
        self.query_one("#items", ListView).action_cursor_down()

    def action_move_up(self) -> None:
        self.query_one("#items", ListView).action_cursor_up()
