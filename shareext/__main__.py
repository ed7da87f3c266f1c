from argparse import ArgumentParser
from pathlib import Path
import os
import sys

from shareext.config import Config, PLUGIN_ID
from shareext.details.context import BuildContext
from shareext.hook import run_hook


def main():
    parser = ArgumentParser(
        description="Add the share extension target to a Cordova iOS project"
    )
    parser.add_argument("--project-root", type=Path, default=Path("."))
    parser.add_argument("--plugin-id", type=str, default=PLUGIN_ID)
    # without either flag the build mode comes from IS_DEBUG
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--debug", dest="debug", action="store_true", default=None)
    mode.add_argument("--release", dest="debug", action="store_false", default=None)
    args = parser.parse_args()

    config = Config(plugin_id=args.plugin_id)
    if args.debug is None:
        context = BuildContext.from_environment(
            args.project_root, environ=os.environ, config=config
        )
    else:
        context = BuildContext(args.project_root, debug=args.debug, config=config)

    result = run_hook(context)
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
