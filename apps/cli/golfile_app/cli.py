"""CLI entrypoints for creating, inspecting and editing .gol board files."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from PIL import Image

from golfile_core import (
    AppConfig,
    clamp_dimension,
    clamp_updates_sec,
    load_config,
    new_settings,
    remember_file,
    save_config,
)
from golfile_core.logging_setup import configure_logging, get_logger
from golfile_format import (
    GOL_SUFFIX,
    RGBA,
    GolFileError,
    PRELUDE_LENGTH,
    Settings,
    StartingView,
    decode,
    decode_prelude,
    read_raw,
    read_settings,
    write_settings,
)
from golfile_renderer import apply_image, render_preview


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _config_file(args: argparse.Namespace) -> Path | None:
    return Path(args.config).expanduser() if getattr(args, "config", None) else None


def _load(args: argparse.Namespace) -> AppConfig:
    return load_config(_config_file(args))


def _save(args: argparse.Namespace, cfg: AppConfig, settings: Settings, path: Path) -> None:
    write_settings(settings, path)
    remember_file(cfg, path)
    save_config(cfg, _config_file(args))


def _color_json(color: RGBA) -> list[int]:
    return [color.r, color.g, color.b, color.a]


def _view_json(view: StartingView) -> dict[str, object]:
    if view.is_center:
        return {"kind": "center", "zoom": view.zoom}
    return {"kind": "fit"}


def cmd_new(args: argparse.Namespace) -> int:
    cfg = _load(args)
    settings = new_settings(cfg)
    if args.width is not None or args.height is not None:
        settings.resize(
            clamp_dimension(args.width if args.width is not None else cfg.grid.squares_x),
            clamp_dimension(args.height if args.height is not None else cfg.grid.squares_y),
        )
    if args.updates_sec is not None:
        settings.set_updates_sec(clamp_updates_sec(args.updates_sec))
    if args.zoom is not None:
        settings.set_starting_view(StartingView.center(args.zoom))

    path = Path(args.path)
    if not path.suffix:
        path = path.with_suffix(GOL_SUFFIX)
    _save(args, cfg, settings, path)
    _print_json({"success": True, "path": str(path), "squares_x": settings.squares_x, "squares_y": settings.squares_y})
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    path = Path(args.path)
    data = read_raw(path)
    prelude = decode_prelude(data)
    payload: dict[str, object] = {
        "path": str(path),
        "bytes": len(data),
        "prelude_bytes": PRELUDE_LENGTH,
        "squares_x": prelude.squares_x,
        "squares_y": prelude.squares_y,
        "updates_sec": prelude.updates_sec,
        "background_color": _color_json(prelude.background_color),
        "square_color_off": _color_json(prelude.square_color_off),
        "square_color_on": _color_json(prelude.square_color_on),
        "starting_view": _view_json(prelude.starting_view),
    }
    payload["live_squares"] = decode(data).live_count()
    _print_json(payload)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    try:
        settings = read_settings(Path(args.path))
    except GolFileError as exc:
        _print_json({"valid": False, "error": type(exc).__name__, "message": str(exc)})
        return 2
    _print_json({"valid": True, "squares_x": settings.squares_x, "squares_y": settings.squares_y})
    return 0


def cmd_resize(args: argparse.Namespace) -> int:
    cfg = _load(args)
    path = Path(args.path)
    settings = read_settings(path)
    settings.resize(clamp_dimension(args.width), clamp_dimension(args.height))
    _save(args, cfg, settings, path)
    _print_json({"success": True, "squares_x": settings.squares_x, "squares_y": settings.squares_y})
    return 0


def cmd_set_color(args: argparse.Namespace) -> int:
    cfg = _load(args)
    path = Path(args.path)
    settings = read_settings(path)
    try:
        color = RGBA(args.r, args.g, args.b, args.a)
    except ValueError as exc:
        _print_json({"success": False, "error": type(exc).__name__, "message": str(exc)})
        return 2
    if args.target == "background":
        settings.set_background_color(color)
    elif args.target == "off":
        settings.set_square_color_off(color)
    else:
        settings.set_square_color_on(color)
    _save(args, cfg, settings, path)
    _print_json({"success": True, "target": args.target, "color": _color_json(color)})
    return 0


def cmd_set_cell(args: argparse.Namespace) -> int:
    cfg = _load(args)
    path = Path(args.path)
    settings = read_settings(path)
    if not (0 <= args.row < settings.squares_y and 0 <= args.column < settings.squares_x):
        _print_json({"success": False, "error": "out_of_range"})
        return 2
    if args.state == "toggle":
        on = settings.toggle_square(args.row, args.column)
    else:
        on = args.state == "on"
        settings.set_square(args.row, args.column, on)
    _save(args, cfg, settings, path)
    _print_json({"success": True, "row": args.row, "column": args.column, "on": on})
    return 0


def cmd_set_view(args: argparse.Namespace) -> int:
    cfg = _load(args)
    path = Path(args.path)
    settings = read_settings(path)
    if args.kind == "center":
        view = StartingView.center(args.zoom)
    else:
        view = StartingView.fit_grid_to_screen()
    settings.set_starting_view(view)
    _save(args, cfg, settings, path)
    _print_json({"success": True, "starting_view": _view_json(view)})
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    settings = read_settings(Path(args.path))
    image = render_preview(settings, cell_px=args.cell_px, gap_px=args.gap_px)
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    image.save(out, format="PNG")
    get_logger().info(f"rendered preview {out.name}", extra={"event": "preview_rendered"})
    _print_json({"success": True, "out": str(out), "size": list(image.size)})
    return 0


def cmd_import_image(args: argparse.Namespace) -> int:
    cfg = _load(args)
    settings = new_settings(cfg)
    try:
        with Image.open(args.image) as image:
            apply_image(settings, image, columns=args.width, rows=args.height, threshold=args.threshold)
    except (OSError, ValueError) as exc:
        # UnidentifiedImageError is an OSError.
        _print_json({"success": False, "error": type(exc).__name__, "message": str(exc)})
        return 2
    path = Path(args.path)
    _save(args, cfg, settings, path)
    _print_json(
        {
            "success": True,
            "path": str(path),
            "squares_x": settings.squares_x,
            "squares_y": settings.squares_y,
            "live_squares": settings.live_count(),
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="golfile", description="Game of Life board file tools")
    parser.add_argument("--config", default=None, help="Optional config file path")
    sub = parser.add_subparsers(dest="command", required=True)

    new_cmd = sub.add_parser("new", help="Create an empty board file")
    new_cmd.add_argument("path")
    new_cmd.add_argument("--width", type=int, default=None)
    new_cmd.add_argument("--height", type=int, default=None)
    new_cmd.add_argument("--updates-sec", type=float, default=None)
    new_cmd.add_argument("--zoom", type=float, default=None, help="Center the grid at this zoom instead of fitting it")
    new_cmd.set_defaults(func=cmd_new)

    info_cmd = sub.add_parser("info", help="Describe a board file")
    info_cmd.add_argument("path")
    info_cmd.set_defaults(func=cmd_info)

    validate_cmd = sub.add_parser("validate", help="Check that a board file is well-formed")
    validate_cmd.add_argument("path")
    validate_cmd.set_defaults(func=cmd_validate)

    resize_cmd = sub.add_parser("resize", help="Resize the grid, clearing every square")
    resize_cmd.add_argument("path")
    resize_cmd.add_argument("--width", type=int, required=True)
    resize_cmd.add_argument("--height", type=int, required=True)
    resize_cmd.set_defaults(func=cmd_resize)

    color_cmd = sub.add_parser("set-color", help="Change one of the board colors")
    color_cmd.add_argument("path")
    color_cmd.add_argument("target", choices=["background", "off", "on"])
    color_cmd.add_argument("r", type=int)
    color_cmd.add_argument("g", type=int)
    color_cmd.add_argument("b", type=int)
    color_cmd.add_argument("a", type=int, nargs="?", default=255)
    color_cmd.set_defaults(func=cmd_set_color)

    cell_cmd = sub.add_parser("set-cell", help="Switch a single square")
    cell_cmd.add_argument("path")
    cell_cmd.add_argument("row", type=int)
    cell_cmd.add_argument("column", type=int)
    cell_cmd.add_argument("state", choices=["on", "off", "toggle"])
    cell_cmd.set_defaults(func=cmd_set_cell)

    view_cmd = sub.add_parser("set-view", help="Choose the starting view")
    view_cmd.add_argument("path")
    view_cmd.add_argument("kind", choices=["fit", "center"])
    view_cmd.add_argument("--zoom", type=float, default=1.0)
    view_cmd.set_defaults(func=cmd_set_view)

    render_cmd = sub.add_parser("render", help="Render a PNG preview of a board")
    render_cmd.add_argument("path")
    render_cmd.add_argument("--out", required=True)
    render_cmd.add_argument("--cell-px", type=int, default=8)
    render_cmd.add_argument("--gap-px", type=int, default=1)
    render_cmd.set_defaults(func=cmd_render)

    import_cmd = sub.add_parser("import-image", help="Build a board from a black and white image")
    import_cmd.add_argument("image")
    import_cmd.add_argument("path")
    import_cmd.add_argument("--width", type=int, default=None)
    import_cmd.add_argument("--height", type=int, default=None)
    import_cmd.add_argument("--threshold", type=int, default=128)
    import_cmd.set_defaults(func=cmd_import_image)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = _load(args)
    cfg_file = _config_file(args)
    configure_logging(
        keep_files=cfg.logging.keep_log_files,
        console=False,
        level=cfg.logging.level,
        directory=cfg_file.parent / "logs" if cfg_file else None,
    )
    try:
        return int(args.func(args))
    except GolFileError as exc:
        get_logger().error(f"{args.command} failed: {exc}", extra={"event": "command_failed"})
        _print_json({"success": False, "error": type(exc).__name__, "message": str(exc)})
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
