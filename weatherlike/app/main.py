"""Headless entrypoint: run one shell session and print the final view state."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
from typing import Optional, Sequence

from ..adapters.signals import DeviceSignals, StaticGeolocation, StaticViewport
from ..adapters.storage_local import StorageLocal
from ..domain.entities import Coordinates
from ..utils import logging as logging_utils
from ..viewmodels.settings_vm import PROVIDERS, SettingsVM
from ..viewmodels.view_state_vm import ViewState
from .controller import AppController
from .orchestrator import Orchestrator

log = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="weatherlike", description=__doc__)
    parser.add_argument("--provider", choices=PROVIDERS, help="Override the configured weather provider.")
    parser.add_argument("--postal", help="Postal code to look up after entering the app.")
    parser.add_argument("--lat", type=float, help="Device latitude (omit to simulate a denied location).")
    parser.add_argument("--lon", type=float, help="Device longitude.")
    parser.add_argument("--width", type=int, default=1280, help="Viewport width in px.")
    parser.add_argument("--height", type=int, default=800, help="Viewport height in px.")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging (saved with --save-settings).")
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist the effective settings (including --provider and --debug) to user_prefs.json.",
    )
    parser.add_argument(
        "--storage-root",
        default=os.environ.get("WEATHERLIKE_STORAGE_ROOT") or ".",
        help="Directory holding user_prefs.json.",
    )
    return parser.parse_args(argv)


def _log_state(state: ViewState) -> None:
    if log.isEnabledFor(logging.DEBUG):
        log.debug("state %s", json.dumps(state.to_dict()))


def load_settings(storage: StorageLocal) -> SettingsVM:
    """Build settings from persisted prefs; broken prefs fall back to defaults."""
    settings_vm = SettingsVM()
    try:
        settings_vm.apply_dict(storage.load_user_prefs())
    except (OSError, ValueError) as exc:
        log.warning("Ignoring saved settings from %s: %s", storage.path, exc)
        settings_vm = SettingsVM()
    return settings_vm


async def run_session(orchestrator: Orchestrator, postal_code: Optional[str] = None) -> ViewState:
    async with orchestrator:
        await orchestrator.wait_idle()
        orchestrator.enter_app()
        if postal_code:
            orchestrator.open_postal_prompt()
            orchestrator.submit_postal_code(postal_code)
            await orchestrator.wait_idle()
        return orchestrator.snapshot


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging_utils.configure_root()
    if (args.lat is None) != (args.lon is None):
        log.error("--lat and --lon must be given together.")
        return 2

    storage = StorageLocal(root_dir=args.storage_root)
    settings_vm = load_settings(storage)
    if args.debug:
        settings_vm.set_debug_logging(True)
    logging_utils.apply_saved_preferences(settings_vm.debug_logging)
    if args.provider:
        settings_vm.provider = args.provider
    if args.save_settings:
        settings_vm.on_save = storage.save_user_prefs
        try:
            settings_vm.cmd_save()
        except (OSError, ValueError) as exc:
            log.error("Could not save settings to %s: %s", storage.path, exc)
            return 2
        log.info("Settings saved to %s", storage.path)

    controller = AppController(settings_vm)
    if not controller.ensure_ready():
        log.error("Settings are incomplete; cannot build a weather provider.")
        return 2

    signals = DeviceSignals.create()
    viewport = StaticViewport(args.width, args.height, changes=signals.resize)
    position = None
    if args.lat is not None:
        try:
            position = Coordinates(args.lat, args.lon)
        except ValueError as exc:
            log.error("Invalid device position: %s", exc)
            return 2
    geolocation = StaticGeolocation(position=position, denied=position is None)

    orchestrator = Orchestrator(
        weather_port=controller.weather_adapter,
        viewport=viewport,
        signals=signals,
        geolocation=geolocation,
        settings=settings_vm.config,
        on_change=_log_state,
    )
    try:
        final = asyncio.run(run_session(orchestrator, args.postal))
    finally:
        controller.reset()

    print(json.dumps(final.to_dict(), indent=2))
    return 1 if final.error else 0


if __name__ == "__main__":
    raise SystemExit(main())
