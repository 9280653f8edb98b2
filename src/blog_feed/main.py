import os
import sys
import logging
from typing import Dict, List, Optional

from blog_feed.config import load_config
from blog_feed.logics.generate_feed import generate_feed
from blog_feed.logics.generate_outputs import TEMPLATE_DIR, generate_outputs
from blog_feed.logics.load_collection import POSTS_COLLECTION, load_collection
from blog_feed.models import AppConfig, OutputPath, OutputType

# Outputs rendered from the feed document.
FEED_OUTPUTS = [
    OutputType(
        template_name="rss.xml.j2",
        relative_output_path="rss.xml",
    ),
]

class Main:
    """
    Builds the feed of the blog.
    """
    def __init__(
            self,
            config: AppConfig,
            template_dir: str = TEMPLATE_DIR,
            ):
        self.config = config
        self.template_dir = template_dir

    def run(self) -> Dict[OutputPath, str]:
        """
        Run the build and return the paths of the written outputs mapped to their content.
        """
        # Load posts.
        posts = load_collection(
            content_dir=self.config.content_dir,
            name=POSTS_COLLECTION,
        )

        # Generate feed.
        if self.config.use_site_metadata:
            feed = generate_feed(
                posts=posts,
                site=self.config.site,
                title=self.config.site_config.title,
                description=self.config.site_config.description,
            )
        else:
            feed = generate_feed(posts=posts, site=self.config.site)

        # Generate outputs.
        outputs = generate_outputs(
            input=feed,
            template_dir=self.template_dir,
            outputs=FEED_OUTPUTS,
        )

        # Normalize and prepare output directory.
        output_dir = os.path.abspath(self.config.output_dir)
        os.makedirs(output_dir, exist_ok=True)

        # Write outputs.
        written: Dict[OutputPath, str] = {}
        for output_path, output_content in outputs.items():
            save_path = os.path.join(output_dir, output_path)
            logging.info(f"Saving output to \"{save_path}\"")
            with open(save_path, "w", encoding="utf-8") as f:
                f.write(output_content)
            written[save_path] = output_content
        return written

def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    try:
        config = load_config(argv)
        Main(config=config).run()
    except (FileNotFoundError, ValueError) as e:
        logging.error(f"Build failed: {e}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
