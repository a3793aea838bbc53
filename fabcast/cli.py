"""Command-line operator and display tools for the broadcast overlay."""
import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from fabcast.client.control_panel import ControlPanel
from fabcast.client.overlay_poller import OverlayPoller
from fabcast.config import BASE_URL, POLL_INTERVAL_SEC
from fabcast.models.overlay import OverlayState, Slot
from fabcast.render.lower_third import LowerThird, RenderFrame, render_text


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="fabcast", description="FAB broadcast lower-third controller")
    parser.add_argument("--base-url", default=BASE_URL, help="Fabcast API base URL")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    lookup = sub.add_parser("lookup", help="Look up a player by GEM ID")
    lookup.add_argument("gem_id")

    publish = sub.add_parser("publish", help="Look up a player and put them on air")
    publish.add_argument("slot", choices=[s.value for s in Slot])
    publish.add_argument("gem_id")

    clear = sub.add_parser("clear", help="Hide a slot's lower third")
    clear.add_argument("slot", choices=[s.value for s in Slot])

    watch = sub.add_parser("watch", help="Poll a slot and print the lower third as it changes")
    watch.add_argument("slot", nargs="?", default=Slot.default().value, choices=[s.value for s in Slot])
    watch.add_argument("--interval", type=float, default=POLL_INTERVAL_SEC, help="Poll interval (seconds)")
    return parser.parse_args(argv)


def _fail(message: str) -> int:
    print(f"error: {message}", file=sys.stderr)
    return 1


async def _lookup(base_url: str, gem_id: str) -> int:
    async with ControlPanel.connect(base_url) as panel:
        controller = panel.player1
        if not await controller.submit(gem_id):
            return _fail("A player ID is required.")
        if controller.looked_up is None:
            return _fail(controller.lookup_error or "Lookup failed.")
        print(json.dumps(controller.looked_up.to_dict(), indent=2))
        return 0


async def _publish(base_url: str, slot: str, gem_id: str) -> int:
    async with ControlPanel.connect(base_url) as panel:
        controller = panel.slot(slot)
        await controller.submit(gem_id)
        if controller.looked_up is None:
            return _fail(controller.lookup_error or "A player ID is required.")
        await controller.publish()
        if controller.send_error:
            return _fail(controller.send_error)
        print(f"{controller.slot.label} live: {controller.live_player.name}")
        return 0


async def _clear(base_url: str, slot: str) -> int:
    async with ControlPanel.connect(base_url) as panel:
        controller = panel.slot(slot)
        current = await panel.api.read_overlay(controller.slot)
        if not current.success:
            return _fail(current.error)
        controller.adopt(OverlayState.from_dict(current.data))
        if not controller.can_clear:
            print(f"{controller.slot.label}: nothing on air")
            return 0
        await controller.clear()
        if controller.send_error:
            return _fail(controller.send_error)
        print(f"{controller.slot.label} cleared")
        return 0


async def _watch(base_url: str, slot: str, interval: float) -> int:
    resolved = Slot.parse(slot)
    lower_third = LowerThird(resolved.side)
    last: Optional[RenderFrame] = None

    def on_state(state: OverlayState) -> None:
        nonlocal last
        frame = lower_third.update(state)
        if frame != last:
            last = frame
            print(f"[{frame.phase.value:>8}] {render_text(frame)}", flush=True)

    async with ControlPanel.connect(base_url) as panel:
        async with OverlayPoller(panel.api, resolved, interval_sec=interval, on_state=on_state):
            await asyncio.Event().wait()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s: %(message)s")
    if args.command == "serve":
        from fabcast.main import serve

        serve(reload=args.reload)
        return 0
    if args.command == "lookup":
        return asyncio.run(_lookup(args.base_url, args.gem_id))
    if args.command == "publish":
        return asyncio.run(_publish(args.base_url, args.slot, args.gem_id))
    if args.command == "clear":
        return asyncio.run(_clear(args.base_url, args.slot))
    try:
        return asyncio.run(_watch(args.base_url, args.slot, args.interval))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
