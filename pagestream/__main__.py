from pagestream.core import setup_logging
from pagestream.terminal_ui.app import PagerApp


def main() -> None:
    setup_logging()
    PagerApp().run()


if __name__ == "__main__":
    main()
