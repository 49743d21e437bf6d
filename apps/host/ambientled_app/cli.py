"""CLI entrypoints for the ambient LED host: run, ports, geometry, sample, clear."""

from __future__ import annotations

import argparse
import json
import logging
import signal
import threading
from dataclasses import asdict

from ambientled_core import (
    DevicePipeline,
    LedMapper,
    PauseFlag,
    ResourceMonitor,
    build_channel,
    build_pipeline,
    build_sampler,
    get_geometry,
    load_config,
)
from ambientled_core.geometry import GEOMETRIES
from ambientled_core.logging_setup import configure_logging, install_crash_hooks
from ambientled_device import SerialTransport


logger = logging.getLogger("ambientled.cli")


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _install_pause_toggle(pauses: list[PauseFlag]) -> None:
    if not hasattr(signal, "SIGUSR1"):
        return

    def _toggle(_signum, _frame) -> None:
        states = [pause.toggle() for pause in pauses]
        logger.info("pause toggled: %s", states, extra={"event": "pause_toggled"})

    signal.signal(signal.SIGUSR1, _toggle)


def cmd_run(args: argparse.Namespace) -> int:
    cfg = load_config()
    install_crash_hooks()
    selected = [d for d in cfg.devices if d.enabled and (not args.device or d.name in args.device)]
    if not selected:
        logger.error("no enabled devices to drive")
        return 1

    pipelines: list[DevicePipeline] = []
    try:
        for device in selected:
            pipelines.append(build_pipeline(device, cfg.refresh.interval_ms, pause=PauseFlag(args.paused)))
    except Exception:
        for p in pipelines:
            p.shutdown()
        raise

    _install_pause_toggle([p.pause for p in pipelines])
    stop = threading.Event()
    signal.signal(signal.SIGTERM, lambda _signum, _frame: stop.set())
    monitor = ResourceMonitor()
    for p in pipelines:
        p.start()
    try:
        while not stop.wait(args.status_every):
            usage = monitor.sample()
            for p in pipelines:
                s = p.scheduler.stats
                logger.info(
                    "status %s",
                    p.name,
                    extra={
                        "event": "status",
                        "device": p.name,
                        "paused": p.pause.is_set(),
                        "cycles": s.cycles,
                        "errors": s.errors,
                        "overruns": s.overruns,
                        "avg_ms": round(s.avg_s * 1000, 1),
                        "cpu_percent": usage.cpu_percent,
                        "rss_mb": round(usage.rss_mb, 1),
                    },
                )
    except KeyboardInterrupt:
        logger.info("interrupted, shutting down")
    finally:
        failures = 0
        for p in pipelines:
            try:
                p.shutdown()
            except Exception:
                failures += 1
                logger.exception("shutdown of %s failed", p.name)
    return 1 if failures else 0


def cmd_list_ports(_args: argparse.Namespace) -> int:
    cfg = load_config()
    hints = {d.name: d.port_hint for d in cfg.devices if d.channel == "serial" and d.port_hint}
    _print_json(
        [
            {
                "device": d.device,
                "description": d.description,
                "hwid": d.hwid,
                "vid": d.vid,
                "pid": d.pid,
                "matches": sorted(name for name, hint in hints.items() if d.matches(hint)),
            }
            for d in SerialTransport.discover()
        ]
    )
    return 0


def cmd_geometry(args: argparse.Namespace) -> int:
    geometry = get_geometry(args.name)
    _print_json(
        {
            "name": geometry.name,
            "reference": [geometry.reference_width, geometry.reference_height],
            "origin": [geometry.origin_x, geometry.origin_y],
            "led_count": geometry.led_count,
            "follow_display": geometry.follow_display,
            "strips": [
                {
                    "name": s.name,
                    "region": asdict(geometry.absolute_region(s)),
                    "axis": s.axis,
                    "cell": s.cell_size,
                    "stride": s.stride,
                    "flags": asdict(s.flags),
                }
                for s in geometry.strips
            ],
            "leds": [asdict(a) for a in sorted(geometry.assignments(), key=lambda a: a.index)],
        }
    )
    return 0


def cmd_sample(args: argparse.Namespace) -> int:
    cfg = load_config()
    device = cfg.device(args.device)
    geometry = get_geometry(device.geometry)
    mapper = LedMapper(geometry, build_sampler(device, geometry), gamma=device.gamma)
    frame = mapper.refresh()
    _print_json({"device": device.name, "geometry": geometry.name, "colors": [c.as_tuple() for c in frame]})
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    cfg = load_config()
    device = cfg.device(args.device)
    channel = build_channel(device, get_geometry(device.geometry).led_count)
    channel.close()
    _print_json({"device": device.name, "cleared": channel.led_count, "stats": asdict(channel.stats)})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ambientled", description="Ambient LED screen mirroring host")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Mirror the screen onto every enabled device")
    run_cmd.add_argument("--device", action="append", default=None, help="Only drive the named device (repeatable)")
    run_cmd.add_argument("--paused", action="store_true", help="Start paused; SIGUSR1 toggles pause")
    run_cmd.add_argument("--status-every", type=float, default=30.0, help="Seconds between status log lines")
    run_cmd.set_defaults(func=cmd_run)

    ports_cmd = sub.add_parser("list-ports", help="List serial ports and matching devices")
    ports_cmd.set_defaults(func=cmd_list_ports)

    geo_cmd = sub.add_parser("geometry", help="Print a device geometry's LED layout")
    geo_cmd.add_argument("--name", default="perimeter", choices=sorted(GEOMETRIES))
    geo_cmd.set_defaults(func=cmd_geometry)

    sample_cmd = sub.add_parser("sample", help="Capture once and print the LED frame")
    sample_cmd.add_argument("--device", required=True, help="Configured device name")
    sample_cmd.set_defaults(func=cmd_sample)

    clear_cmd = sub.add_parser("clear", help="Blank a device's strip and release it")
    clear_cmd.add_argument("--device", required=True, help="Configured device name")
    clear_cmd.set_defaults(func=cmd_clear)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config()
    configure_logging(
        keep_files=cfg.logging.keep_files,
        console=cfg.logging.console,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
