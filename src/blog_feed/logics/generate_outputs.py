import os
import re
import logging
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Dict, List
from urllib.parse import urljoin

from jinja2 import Environment, FileSystemLoader, select_autoescape

from blog_feed.models import OutputPath, OutputType

# Directory of the templates shipped with the package.
TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")
# Characters outside the XML 1.0 Char production.
_XML_INVALID_CHARS_RE = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")

def rfc822(value: datetime) -> str:
    """
    Format a datetime as an RFC 822 date in GMT, as RSS expects.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)

def xml_text(value: Any) -> Any:
    """
    Drop characters an XML document cannot contain, such as stray control characters.
    """
    if isinstance(value, str):
        return _XML_INVALID_CHARS_RE.sub("", value)
    return value

def absolute_url(link: str, site: str) -> str:
    """
    Resolve a link against the base URL of the site.
    """
    return urljoin(site, link)

def create_environment(template_dir: str) -> Environment:
    """
    Create the Jinja environment used to render outputs.
    """
    env = Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(["html", "xml", "html.j2", "xml.j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["rfc822"] = rfc822
    env.filters["absolute_url"] = absolute_url
    env.filters["xml_text"] = xml_text
    return env

def generate_outputs(
    input: Any,
    template_dir: str,
    outputs: List[OutputType]
) -> Dict[OutputPath, str]:
    """
    Generate outputs from an input using the specified output types. The input will be passed to the template as the `input` variable.

    Returns:
        Dict[OutputPath, str]: A dictionary mapping relative output paths to their rendered content.
    """
    logging.info(f"Generating {len(outputs)} outputs from \"{template_dir}\"")

    env = create_environment(template_dir)

    rendered_outputs: Dict[OutputPath, str] = {}
    for output in outputs:
        logging.info(f"Generating output: {output.template_name}")

        template = env.get_template(output.template_name)
        rendered_outputs[output.relative_output_path] = template.render(input=input)

        logging.info(f"Output generated: {output.relative_output_path}")

    return rendered_outputs
