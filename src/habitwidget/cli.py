#!/usr/bin/env python3
"""
Habit widget CLI - publish snapshots and drive widget refreshes from a shell.
"""

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config.loader import ConfigLoader
from .controller import Timeline, TimelineEntry
from .host import WidgetHost, build_controller
from .platforms import list_platforms
from .platforms.base import FAMILY_SIZES
from .store.writer import SnapshotWriter
from .utils.errors import HabitWidgetError

logger = logging.getLogger(__name__)


class HabitWidgetCLI:
    """Main CLI handler for habit widget commands."""

    def __init__(self, config_path: Optional[str] = None) -> None:
        self.config_path = config_path
        self.config_loader = ConfigLoader()
        self._config: Optional[Dict[str, Any]] = None

    @property
    def config(self) -> Dict[str, Any]:
        if self._config is None:
            self._config = self.config_loader.load(self.config_path)
        return self._config

    def render(self, platform: Optional[str] = None, family: Optional[str] = None) -> int:
        """Run one refresh cycle and print the platform view as YAML."""
        controller = build_controller(self.config, platform, family)
        timeline = controller.refresh()
        if timeline is None:
            print("Refresh was cancelled.")
            return 1
        self._print_entry(controller.platform, timeline.entry, timeline)
        return 0

    def placeholder(self, platform: Optional[str] = None, family: Optional[str] = None) -> int:
        """Print the placeholder view (the store is not read)."""
        controller = build_controller(self.config, platform, family)
        self._print_entry(controller.platform, controller.placeholder())
        return 0

    def publish(
        self,
        title: Optional[str] = None,
        content: Optional[str] = None,
        clear_title: bool = False,
        clear_content: bool = False,
    ) -> int:
        """Write widget keys into the shared store, as the host app would."""
        updates = {}
        if clear_title:
            updates["title"] = None
        elif title is not None:
            updates["title"] = title
        if clear_content:
            updates["content"] = None
        elif content is not None:
            updates["content"] = content

        if not updates:
            print("Nothing to publish: pass --title and/or --content")
            return 1

        store = self.config["store"]
        document = SnapshotWriter(store["suite"], store["directory"]).save(**updates)
        print(f"Published to {store['suite']}:")
        print(yaml.safe_dump(document, allow_unicode=True, sort_keys=True), end="")
        return 0

    def preview(self, output: str, family: Optional[str] = None) -> int:
        """Render the current snapshot to a PNG image."""
        controller = build_controller(self.config, "desktop", family)
        timeline = controller.refresh()
        if timeline is None:
            return 1
        self._save_image(timeline, output)
        print(f"Wrote {output}")
        return 0

    def watch(self, output: str, family: Optional[str] = None, interval: Optional[float] = None) -> int:
        """Re-render the widget image on every host tick until interrupted."""
        controller = build_controller(self.config, "desktop", family)
        host = WidgetHost(controller)

        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, shutting down gracefully...")
            host.stop()

        signal.signal(signal.SIGTERM, signal_handler)

        host.run(
            interval or self.config["host"]["refresh_interval"],
            lambda timeline: self._save_image(timeline, output),
        )
        return 0

    def tap(self) -> int:
        """Fire the widget's tap action on the desktop."""
        controller = build_controller(self.config, "desktop")
        entry = controller.placeholder()
        return 0 if controller.platform.handle_tap(entry.view) else 1

    def validate_config(self, config_path: str) -> int:
        """Validate a configuration file."""
        print(f"Validating {config_path}...")
        try:
            config = self.config_loader.load(config_path)
        except FileNotFoundError as e:
            print(f"\n❌ {e}")
            return 1
        except HabitWidgetError as e:
            print(f"\n❌ Validation FAILED:\n  ERROR: {e}")
            return 1

        print("\n✅ Configuration is valid")
        print(f"  suite: {config['store']['suite']}")
        print(f"  platform: {config['widget']['platform']}")
        print(f"  families: {', '.join(config['widget']['families'])}")
        return 0

    def _print_entry(self, platform, entry: TimelineEntry, timeline: Optional[Timeline] = None) -> None:
        document = {
            "platform": platform.name,
            "date": entry.date.isoformat(),
            "snapshot": {"title": entry.snapshot.title, "content": entry.snapshot.content},
            "view": platform.describe(entry.content),
        }
        if timeline is not None:
            document["policy"] = timeline.policy.value
        print(yaml.safe_dump(document, allow_unicode=True, sort_keys=False), end="")

    def _save_image(self, timeline: Timeline, output: str) -> None:
        path = Path(output).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        timeline.entry.content.save(path, format="PNG")
        logger.debug(f"Saved widget image to {path}")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="habitwidget",
        description="Habit widget - home-screen snapshot publishing and rendering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  habitwidget publish --title "3 Left" --content "Water, Stretch"
  habitwidget render --platform android         # Print RemoteViews description
  habitwidget render --platform ios --family medium
  habitwidget preview -o ~/habit.png            # Rasterise current snapshot
  habitwidget watch -o ~/habit.png              # Keep the image up to date
  habitwidget config validate widget.yaml
""",
    )
    parser.add_argument("-c", "--config", help="Path to YAML configuration file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    family_kwargs = {"choices": sorted(FAMILY_SIZES), "help": "Widget size family"}

    render_parser = subparsers.add_parser("render", help="Run one refresh and print the view")
    render_parser.add_argument("--platform", choices=list_platforms(), help="Target platform")
    render_parser.add_argument("--family", **family_kwargs)

    placeholder_parser = subparsers.add_parser("placeholder", help="Print the placeholder view")
    placeholder_parser.add_argument("--platform", choices=list_platforms(), help="Target platform")
    placeholder_parser.add_argument("--family", **family_kwargs)

    publish_parser = subparsers.add_parser("publish", help="Write snapshot keys to the store")
    publish_parser.add_argument("--title", help="Headline text")
    publish_parser.add_argument("--content", help="Body text")
    publish_parser.add_argument("--clear-title", action="store_true", help="Remove the title key")
    publish_parser.add_argument(
        "--clear-content", action="store_true", help="Remove the content key"
    )

    preview_parser = subparsers.add_parser("preview", help="Render the widget to a PNG file")
    preview_parser.add_argument("-o", "--output", required=True, help="Output PNG path")
    preview_parser.add_argument("--family", **family_kwargs)

    watch_parser = subparsers.add_parser("watch", help="Keep a PNG rendering up to date")
    watch_parser.add_argument("-o", "--output", required=True, help="Output PNG path")
    watch_parser.add_argument("--family", **family_kwargs)
    watch_parser.add_argument("--interval", type=float, help="Seconds between refreshes")

    subparsers.add_parser("tap", help="Open the host app as a widget tap would")

    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_command")
    validate_parser = config_subparsers.add_parser("validate", help="Validate a configuration")
    validate_parser.add_argument("path", help="Configuration file")

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    cli = HabitWidgetCLI(args.config)

    try:
        if args.command == "render":
            return cli.render(args.platform, args.family)

        elif args.command == "placeholder":
            return cli.placeholder(args.platform, args.family)

        elif args.command == "publish":
            return cli.publish(args.title, args.content, args.clear_title, args.clear_content)

        elif args.command == "preview":
            return cli.preview(args.output, args.family)

        elif args.command == "watch":
            return cli.watch(args.output, args.family, args.interval)

        elif args.command == "tap":
            return cli.tap()

        elif args.command == "config":
            if args.config_command == "validate":
                return cli.validate_config(args.path)
            parser.print_help()
            return 1

        else:
            parser.print_help()
            return 1

    except (HabitWidgetError, FileNotFoundError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
