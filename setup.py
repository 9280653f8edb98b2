#!/usr/bin/env python3
"""Setup script for blog-feed."""
from setuptools import find_packages, setup

# Read version from package
with open("src/blog_feed/__init__.py", "r") as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split("=")[1].strip().strip('"').strip("'")
            break

# Read long description from README
with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name="blog-feed",
    version=version,
    description="RSS feed builder for a Markdown blog",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Hamim",
    url="https://seracoder.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"blog_feed": ["templates/*.j2"]},
    python_requires=">=3.9",
    install_requires=[
        "jinja2>=3.1.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dateutil>=2.8.2",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "feedparser>=6.0.0",
            "ruff>=0.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "blog-feed=blog_feed.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
    ],
)
