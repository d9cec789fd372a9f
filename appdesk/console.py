"""
AppImage Desk command line interface
"""
import sys
import logging
import argparse

from . import __release__, DOC_HTML
from .core import conf
from .install.request import (
    CATEGORIES, UTILITY, DesktopFileBuilder, remove_added_files)
from .install.freedesktop import check_if_desktop_file_exists

logger = logging.getLogger(__name__)

MODNAME = '.'.join(globals()['__name__'].split('.')[:-1])

HEADER = f"AppImage Desk {__release__}"
HEADER += '\n' + len(HEADER) * '=' + '\n'

HEADER += DOC_HTML + '\n'

epilog = f"""\
Examples
--------

{MODNAME} register org.example.app Example -i example.svg --uninstall
{MODNAME} check org.example.app
{MODNAME} test ./Example.AppImage org.example.app Example
"""


def action_spec(text):
    """Split CODE:NAME:ARGUMENTS, the arguments may contain colons."""
    parts = text.split(':', 2)
    if len(parts) != 3 or not parts[0] or not parts[1]:
        raise argparse.ArgumentTypeError(f'expected CODE:NAME:ARGUMENTS, got {text!r}')
    return tuple(parts)


def add_request_arguments(parser):
    parser.add_argument("app_id", help="Unique reverse DNS identifier of the app")
    parser.add_argument("app_name", help="Display name of the app")
    parser.add_argument("--description", default='', help="Comment of the desktop entry")
    parser.add_argument("--window_class", help="StartupWMClass, default is the app name")
    parser.add_argument("--category", default=UTILITY, choices=CATEGORIES, help="Main category")
    parser.add_argument("--keyword", action='append', default=[], help="Search keyword, can be repeated")
    parser.add_argument("-i", "--icon", action='append', default=[], help="Icon file, can be repeated")
    parser.add_argument("--scale_icons", action='store_true', help="Scale raster icons to all theme sizes")
    parser.add_argument("--action", type=action_spec, action='append', default=[], metavar='CODE:NAME:ARGUMENTS',
        help="Quick list action starting the app with extra arguments, for example --action='new:New window:--new-window'")
    parser.add_argument("--uninstall", action='store_true', help="Add an uninstall script and action")
    parser.add_argument("--uninstall_path", action='append', default=[], help="Extra path removed on uninstall")
    parser.add_argument("--mime", nargs=3, metavar=('TYPE', 'DESCRIPTION', 'GLOB'),
        help="Register a mime type, for example application/x-example 'Example file' '*.example'")
    parser.add_argument("--auto_associate", action='store_true', help="Also add the mime type to the added associations")


def argparser():
    parser = argparse.ArgumentParser(description=HEADER, prog=f'python -m {MODNAME}',
        formatter_class=argparse.RawDescriptionHelpFormatter, epilog=epilog)

    parser.add_argument("-c", "--config_file", help="Use this configuration file")
    parser.add_argument("-d", "--debug", action='store_true', help="Set logging level to debug")
    parser.add_argument("--dump_config", help="Write the non default configuration to this json file")

    subparsers = parser.add_subparsers(dest='command', required=True)

    register = subparsers.add_parser('register', help="Register the running bundle with the desktop")
    add_request_arguments(register)
    register.add_argument("--force", action='store_true', help="Register even if already registered")

    check = subparsers.add_parser('check', help="Exit with 0 if the running bundle is registered")
    check.add_argument("app_id", help="Unique reverse DNS identifier of the app")

    test = subparsers.add_parser('test', help="Register an extracted copy of a bundle and clean up afterwards")
    test.add_argument("app_image", help="Path of the bundle file")
    test.add_argument("--squash_path", help="Already extracted contents of the bundle")
    test.add_argument("--keep", action='store_true', help="Do not remove the created files")
    add_request_arguments(test)

    return parser


def builder_from_args(args):
    builder = (DesktopFileBuilder(args.app_id, args.app_name)
        .with_description(args.description)
        .with_window_class(args.window_class)
        .with_category(args.category)
        .with_keywords(*args.keyword))

    for icon in args.icon:
        builder.add_icon_file(icon, scale=args.scale_icons)

    for code, name, arguments in args.action:
        builder.add_custom_arguments_action(code, name, arguments)

    if args.uninstall:
        builder.add_uninstall_action(*args.uninstall_path)

    if args.mime:
        builder.with_mime_type(*args.mime, auto_associate=args.auto_associate)

    return builder


def report(result):
    if result.success:
        logger.info(f'Created {len(result.added_files)} file(s)')
    else:
        logger.error(result.error_message)

    if result.mime_type_error:
        logger.warning(f'Mime type: {result.mime_type_error}')


def run_register(args):
    if not args.force and check_if_desktop_file_exists(args.app_id):
        logger.info(f'{args.app_id} is already registered')
        return 0

    result = builder_from_args(args).build()
    report(result)
    return 0 if result.success else 1


def run_check(args):
    registered = check_if_desktop_file_exists(args.app_id)
    print(f'{args.app_id}: {"registered" if registered else "not registered"}')
    return 0 if registered else 1


def run_test(args):
    builder = builder_from_args(args).with_debug_app_image(args.app_image, args.squash_path)
    result = builder.build()
    report(result)

    if not args.keep:
        for path in remove_added_files(result):
            print(f'Removed {path}')

    return 0 if result.success else 1


def argexec(argv=None, **config_kwargs):
    parser = argparser()
    args = parser.parse_args(argv)

    if not any(handler.get_name() == 'boot' for handler in logging.root.handlers):
        boot_handler = logging.StreamHandler(sys.stdout)
        boot_handler.set_name('boot')
        logging.root.addHandler(boot_handler)

    if args.debug:
        config_kwargs['logging_level'] = 'DEBUG'
        logging.root.setLevel(config_kwargs['logging_level'])

    if args.config_file:
        config_kwargs['path_config_files'] = [args.config_file]

    conf.configure(**config_kwargs)

    if args.dump_config:
        conf.save_config_json(args.dump_config)

    commands = {
        'register': run_register,
        'check': run_check,
        'test': run_test,
    }

    return commands[args.command](args)
