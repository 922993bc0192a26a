# main.py
import argparse
import logging
import sys
import time

from pathtracer import __version__
from pathtracer.core.errors import RaytracerError, pretty_stack
from pathtracer.generate import gradient
from pathtracer.hitlist import HitList
from pathtracer.renderer.base import RenderBackend
from pathtracer.renderer.multi import MultiThreadRenderer, MultiThreadRendererConfig
from pathtracer.renderer.single import SingleThreadRenderer
from pathtracer.specifications.features import Features, FeaturesCli, FeaturesFile
from pathtracer.specifications.scene import SceneFile

logger = logging.getLogger(__name__)


def parse_dims(raw: str):
    """Parses a '<WIDTH>x<HEIGHT>' pair."""
    width, sep, height = raw.partition("x")
    if not sep:
        raise argparse.ArgumentTypeError(f"Cannot find 'x' in dimensions '{raw}'")
    dims = []
    for name, value in (("width", width), ("height", height)):
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Cannot parse {name} '{value}' as an unsigned integer") from None
        if number < 1:
            raise argparse.ArgumentTypeError(f"The {name} must be positive, got {number}")
        dims.append(number)
    return tuple(dims)


def parse_backend(raw: str) -> RenderBackend:
    try:
        return RenderBackend.parse(raw)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathtracer", description="Renders sphere scenes with a path tracer.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--debug", action="store_true",
                        help="If given, will enable additional debug prints.")
    parser.add_argument("--trace", action="store_true",
                        help="If given, will enable the most verbose debug prints. Implies '--debug'.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Renders a particular scene.")
    render.add_argument("scene_path", metavar="SCENE_PATH", help="The path to the scene file to render.")
    render.add_argument("output_path", metavar="OUTPUT_PATH", nargs="?", default="./image.png",
                        help="The path to write the rendered image to.")
    render.add_argument("-d", "--dims", type=parse_dims, default=(800, 600),
                        help="The size of the output image, as '<WIDTH>x<HEIGHT>'.")
    render.add_argument("-f", "--fix-dirs", action="store_true",
                        help="If given, will generate missing directories for the output image.")
    render.add_argument("-F", "--features-file", default=None,
                        help="If given, will use the features enabled in the given features file.")
    FeaturesCli.add_arguments(render)
    render.add_argument("-b", "--backend", type=parse_backend, default=RenderBackend.SINGLE,
                        help="The renderer to use: 'single' or 'multi' (threaded).")
    render.add_argument("-c", "--backend-config", default=None,
                        help="A YAML file configuring the multi-threaded backend.")
    render.add_argument("-t", "--threads", type=int, default=None,
                        help="The number of threads for the multi-threaded backend. Overrides the backend config.")
    render.add_argument("--seed", type=int, default=None,
                        help="Seeds the random sampling, making renders reproducible.")

    generate = subparsers.add_parser("generate", help="Generates files for testing or for rendering.")
    generate.add_argument("-f", "--fix-dirs", action="store_true",
                          help="If given, generates missing directories instead of erroring.")
    generate_sub = generate.add_subparsers(dest="what", required=True)
    grad = generate_sub.add_parser("gradient", help="Generates the test gradient image.")
    grad.add_argument("path", metavar="PATH", nargs="?", default="./image.png",
                      help="The output path to generate the file to.")
    grad.add_argument("dims", metavar="DIMENSIONS", nargs="?", type=parse_dims, default=(256, 256),
                      help="The dimensions of the output image, as '<WIDTH>x<HEIGHT>'.")
    return parser


def setup_logging(debug: bool, trace: bool):
    if trace:
        fmt = "%(asctime)s %(levelname)-7s %(name)s (%(filename)s:%(lineno)d): %(message)s"
    else:
        fmt = "%(levelname)s: %(message)s"
    logging.basicConfig(level=logging.DEBUG if (debug or trace) else logging.WARNING, format=fmt)


def create_renderer(args, features: Features):
    if args.backend is RenderBackend.MULTI:
        config = MultiThreadRendererConfig()
        if args.backend_config is not None:
            config = MultiThreadRendererConfig.from_path(args.backend_config)
        if args.threads is not None:
            config = MultiThreadRendererConfig(n_threads=args.threads)
        return MultiThreadRenderer(args.dims, features, config, seed=args.seed, show_progress=True)
    return SingleThreadRenderer(args.dims, features, show_progress=True, seed=args.seed)


def run_render(args):
    features_file = FeaturesFile.from_path(args.features_file) if args.features_file is not None else None
    features = Features.resolve(features_file, FeaturesCli.from_args(args))

    scene = SceneFile.from_path(args.scene_path)
    hit_list = HitList.from_objects(scene.objects)
    renderer = create_renderer(args, features)

    start = time.perf_counter()
    image = renderer.render_frame(hit_list)
    logger.info("Rendered frame in %.2fs", time.perf_counter() - start)

    image.to_path(args.output_path, args.fix_dirs)
    print(f"Successfully rendered scene to {args.output_path}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug, args.trace)
    logger.info("pathtracer v%s", __version__)

    try:
        if args.command == "render":
            run_render(args)
        elif args.command == "generate" and args.what == "gradient":
            gradient(args.path, args.dims, args.fix_dirs)
    except RaytracerError as err:
        logger.error("%s", pretty_stack(err))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
