import argparse
import sys

import yaml

from catalog.errors import InvalidEntryError, WriteError
from catalog.missing_translations import find_missing_translations
from catalog.provider import LocalizationProvider
from utils.config import ConfigManager
from utils.logging_setup import get_logger, setup_logging

logger = get_logger("strings_manager")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_FOUND = 2


def catalog_to_dict(groups):
    return [
        {
            "name": group.name,
            "path": group.path,
            "localizations": [
                {
                    "language": localization.language,
                    "path": localization.path,
                    "translations": [
                        {"key": entry.key, "value": entry.value, "message": entry.message}
                        for entry in localization.translations
                    ],
                }
                for localization in group.localizations
            ],
        }
        for group in groups
    ]


def find_group(groups, name_or_path):
    for group in groups:
        if group.path == name_or_path:
            return group
    matches = [group for group in groups if group.name == name_or_path]
    if len(matches) > 1:
        logger.warning(f"Several groups are named {name_or_path}, using {matches[0].path}")
    return matches[0] if matches else None


def scan_command(provider, args):
    results = provider.scan(args.root)
    if args.yaml:
        yaml.safe_dump(catalog_to_dict(results.groups), sys.stdout, allow_unicode=True, sort_keys=False)
    else:
        print(results.format_status_report())
    return EXIT_OK


def audit_command(provider, args):
    one_missing_translation_found = False
    for group in provider.get_localizations(args.root):
        missing = find_missing_translations(group)
        for key, languages in missing.missing_language_groups:
            print(f"{group.name}: missing \"{key}\" in languages: {languages}")
            one_missing_translation_found = True
        for key, languages in missing.blank_value_groups:
            print(f"{group.name}: blank \"{key}\" in languages: {languages}")
            one_missing_translation_found = True

    if not one_missing_translation_found:
        print("No missing translations found.")
        return EXIT_OK
    return EXIT_FAILED


def update_command(provider, args):
    group = find_group(provider.get_localizations(args.root), args.group)
    if group is None:
        print(f"No strings file group found for {args.group}")
        return EXIT_NOT_FOUND
    localization = group.get_localization(args.language)
    if localization is None:
        print(f"Group {group.name} has no language {args.language}, found: {group.languages}")
        return EXIT_NOT_FOUND

    if args.no_message:
        message = None
    elif args.message is not None:
        message = args.message
    else:
        # Keep the comment the entry already has
        existing = localization.get_entry(args.key)
        message = existing.message if existing is not None else None

    try:
        changed = provider.update_localization(localization, args.key, args.value, message)
    except (WriteError, InvalidEntryError) as e:
        print(f"Error: {e}")
        return EXIT_FAILED

    print(f"Updated \"{args.key}\" in {localization.path}" if changed else "Value unchanged, nothing written.")
    return EXIT_OK


def build_parser():
    parser = argparse.ArgumentParser(description="Inspect and edit .strings localization files.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config-dir", default=None, help="Directory holding default_config.json and user_config.json")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser("scan", help="List localization groups under a directory")
    scan_parser.add_argument("root")
    scan_parser.add_argument("--yaml", action="store_true", help="Dump the whole catalog as YAML")
    scan_parser.set_defaults(func=scan_command)

    audit_parser = subparsers.add_parser("audit", help="Report keys missing from some languages")
    audit_parser.add_argument("root")
    audit_parser.set_defaults(func=audit_command)

    update_parser = subparsers.add_parser("update", help="Set one value and rewrite its file")
    update_parser.add_argument("root")
    update_parser.add_argument("group", help="Group name (e.g. Localizable.strings) or group path")
    update_parser.add_argument("language")
    update_parser.add_argument("key")
    update_parser.add_argument("value")
    message_group = update_parser.add_mutually_exclusive_group()
    message_group.add_argument("--message", default=None,
                               help="Comment written above the entry, the current one is kept if omitted")
    message_group.add_argument("--no-message", action="store_true", help="Remove the comment of the entry")
    update_parser.set_defaults(func=update_command)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    config_manager = ConfigManager(args.config_dir)
    setup_logging(debug=args.debug or bool(config_manager.get("logging.debug", False)),
                  log_file=config_manager.get("logging.file"))
    provider = LocalizationProvider(config_manager=config_manager)
    return args.func(provider, args)


if __name__ == "__main__":
    sys.exit(main())
