import os
import logging
from argparse import ArgumentParser, Namespace as ArgNamespace
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from blog_feed.models import AppConfig, AppEnvSettings, SiteConfig

DEFAULT_CONTENT_DIR = os.path.join("src", "contents")
DEFAULT_SITE_CONFIG = "site.yaml"
DEFAULT_OUTPUT_DIR = "dist"

def parse_cli_arguments(argv: Optional[List[str]] = None) -> ArgNamespace:
    """
    Parse the command line arguments.
    """
    parser = ArgumentParser(description="Build the RSS feed of the blog.")
    parser.add_argument(
        "-c", "--content-dir",
        type=str,
        help="The directory holding the content collections.",
    )
    parser.add_argument(
        "-s", "--site-config",
        type=str,
        help="The YAML file describing the site.",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=str,
        help="The directory to save the output.",
    )
    parser.add_argument(
        "-u", "--site",
        type=str,
        help="The base URL of the site, overriding the site configuration.",
    )
    parser.add_argument(
        "--use-site-metadata",
        action="store_true",
        help="Take the feed title and description from the site configuration instead of the placeholders.",
    )
    return parser.parse_args(argv)

def load_site_config(file_path: str) -> SiteConfig:
    """
    Load the site configuration from a YAML file.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Site configuration not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in site configuration \"{file_path}\": {e}") from e

    if data is None:
        data = {}
    try:
        return SiteConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid site configuration \"{file_path}\": {e}") from e

def load_config(argv: Optional[List[str]] = None) -> AppConfig:
    """
    Load the configuration. Command line arguments take precedence over environment variables.
    """
    load_dotenv()
    cli_args = parse_cli_arguments(argv)
    env_settings = AppEnvSettings()

    site_config_path = cli_args.site_config \
        or env_settings.site_config \
        or DEFAULT_SITE_CONFIG
    site_config = load_site_config(site_config_path)
    logging.info(f"Loaded site configuration for \"{site_config.title}\" from \"{site_config_path}\"")

    site = cli_args.site or env_settings.site or site_config.site
    if not site:
        raise ValueError("No site URL provided. Set `site` in the site configuration or pass --site.")

    return AppConfig(
        content_dir=cli_args.content_dir
            or env_settings.content_dir
            or DEFAULT_CONTENT_DIR,
        output_dir=cli_args.output_dir
            or env_settings.output_dir
            or DEFAULT_OUTPUT_DIR,
        site=site,
        site_config=site_config,
        use_site_metadata=cli_args.use_site_metadata
            or env_settings.use_site_metadata,
    )
