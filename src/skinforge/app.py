"""SkinForge command-line entry point.

Loads a skin PNG, builds the layered humanoid model and writes it as GLB.
"""

import argparse
import logging
import sys
from pathlib import Path

from skinforge.core.events import EventBus, SkinEventType
from skinforge.coordination.model_controller import SkinModelController
from skinforge.export.glb_exporter import export_glb
from skinforge.loaders.skin_loader import SkinFormatError, load_skin
from skinforge.skin.catalogue import BodyPartKey, LayerKind, ModelVariant

logger = logging.getLogger(__name__)


def parse_visibility_spec(spec: str) -> list[tuple[BodyPartKey, LayerKind]]:
    """Parse "PART" or "PART:LAYER" (e.g. "head:overlay") into toggles.

    A bare part name selects both layers.  Unknown names raise KeyError.
    """
    part_name, _, layer_name = spec.partition(":")
    parts = {p.value.lower(): p for p in BodyPartKey}
    part = parts.get(part_name.strip().lower())
    if part is None:
        raise KeyError(f"Unknown body part: {part_name!r}")
    if not layer_name:
        return [(part, layer) for layer in LayerKind]
    try:
        layer = LayerKind(layer_name.strip().lower())
    except ValueError:
        raise KeyError(f"Unknown layer: {layer_name!r}") from None
    return [(part, layer)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skinforge",
        description="Build a layered 3D humanoid from a skin PNG and export it as GLB.",
    )
    parser.add_argument("skin", type=Path, help="Skin PNG (64x64 or 64x128)")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Output .glb path (default: <skin>.glb)")
    parser.add_argument("--variant", choices=[v.value for v in ModelVariant],
                        default=ModelVariant.CLASSIC.value,
                        help="Arm layout (default: classic)")
    parser.add_argument("--hide", action="append", default=[], metavar="PART[:LAYER]",
                        help="Hide a part or one of its layers; repeatable")
    parser.add_argument("--include-hidden", action="store_true",
                        help="Export hidden layers too")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def run(args: argparse.Namespace) -> int:
    skin = load_skin(args.skin)
    variant = ModelVariant(args.variant)

    event_bus = EventBus()
    event_bus.subscribe(
        SkinEventType.LAYER_TOGGLED,
        lambda part, layer, visible: logger.debug(
            "%s %s layer %s", "Showing" if visible else "Hiding", part.value, layer.value),
    )
    controller = SkinModelController(event_bus=event_bus)
    root = controller.load(skin.image, variant, skin.height)

    for spec in args.hide:
        for part, layer in parse_visibility_spec(spec):
            controller.set_layer_visible(part, layer, False)

    output = args.output or args.skin.with_suffix(".glb")
    count = export_glb(root, output, texture_png=skin.png_bytes,
                       include_hidden=args.include_hidden)
    logger.info("Wrote %s (%d meshes, %s)", output, count, variant.value)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Launch the SkinForge CLI."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s: %(message)s",
    )
    try:
        return run(args)
    except (SkinFormatError, FileNotFoundError, KeyError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
