import argparse, logging, sys
from .configuration import load_values, parse_bool_env_var
from .create_manifests import create_manifests, MANIFEST_GENERATORS
from .models import ChartInfo
from .yaml_tools import dump_manifests

DEBUG = parse_bool_env_var('DEBUG')

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    defaults = ChartInfo()
    parser = argparse.ArgumentParser(prog='auto-deploy-manifests',
        description='Render the auto-deploy Deployments and NetworkPolicy for a release.')
    parser.add_argument('release', help='release name')
    parser.add_argument('-f', '--values', action='append', default=[], help='values file, may be repeated (later files win)')
    parser.add_argument('--set', dest='set_values', action='append', default=[], help='set a value on top of the values files (key=value, e.g. workers.worker1.command[0]=echo)')
    parser.add_argument('--chart-name', default=defaults.name, help='chart name used for the chart label and container names')
    parser.add_argument('--chart-version', default=defaults.version, help='chart version used for the chart label')
    parser.add_argument('-s', '--show-only', action='append', choices=list(MANIFEST_GENERATORS), help='only render the given manifest type, may be repeated')
    parser.add_argument('-o', '--output', help='write manifests to this file instead of stdout')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], default='WARNING')
    return parser


def main():
    args = _make_parser().parse_args()
    logging.basicConfig(level='DEBUG' if DEBUG else args.log_level)

    values = load_values(args.values, args.set_values)
    chart = ChartInfo(name=args.chart_name, version=args.chart_version)

    manifests = create_manifests(args.release, values, chart, args.show_only)
    _LOGGER.info("Generated %d manifests for release %s", len(manifests), args.release)
    manifests_string = dump_manifests(manifests)

    if args.output:
        with open(args.output, 'w') as f:
            f.write(manifests_string)
    else:
        sys.stdout.write(manifests_string)


def run():
    if DEBUG:
        main()
    else:
        try:
            main()
        # discard stack trace
        except Exception as e:
            print(f"{type(e).__name__}:", e, file=sys.stderr)
            sys.exit(1)


if __name__ == '__main__':
    run()
