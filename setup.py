from setuptools import setup, find_packages
import os

# Import version from ConfStore/__init__.py
import re
with open(os.path.join('ConfStore', '__init__.py'), 'r') as f:
    version = re.search(r"__version__\s*=\s*'(.*)'", f.read()).group(1)

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="ConfStore",
    version=version,
    author="Manan Ramnani",
    author_email="email@cryptek.dev",
    description="Hierarchical configuration storage with dotted keys, backed by INI or JSON files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/cryptekbits/ConfStore-py",
    project_urls={
        "Bug Tracker": "https://github.com/cryptekbits/ConfStore-py/issues",
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(include=["ConfStore", "ConfStore.*"]),
    python_requires=">=3.8",
    install_requires=[
        "click>=8.0.0",
        "PyYAML>=5.4",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "confstore=ConfStore.__main__:main",
        ],
    },
)
