"""CLI Main Entry Point"""

import sys

from aicommit.config import Config, ConfigError, ConfigManager, apply_env_overrides
from aicommit.output import configure_logging, print_error
from aicommit.workflow import CommitOptions, CommitWorkflow

from aicommit.cli.args import parse_args
from aicommit.cli.commands import display_config, run_install_completion


def load_config(args) -> tuple[Config, object]:
    """Resolve configuration.

    Precedence: CLI args > environment variables > config file > defaults
    """
    manager = ConfigManager(args.config)
    config = apply_env_overrides(manager.load())

    if args.provider:
        config.provider = args.provider
    if args.model:
        config.model = args.model
    return config, manager.get_config_path()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    if args.install_completion:
        return run_install_completion()

    try:
        config, config_path = load_config(args)
    except ConfigError as e:
        print_error(str(e))
        return 1

    if args.display_config:
        return display_config(config, config_path)

    options = CommitOptions(
        push=args.push,
        clasp=args.clasp,
        wrangler=args.wrangler,
        export_path=args.export,
    )
    return CommitWorkflow(config).run(options)


if __name__ == "__main__":
    sys.exit(main())
