"""
This file is used to specify the package metadata. The library is pure Python and
has no compiled extensions.
"""

from setuptools import setup

PACKAGES = [
    "cookiekit",
    "cookiekit.settings",
    "cookiekit.utils",
]


def get_version() -> str:
    with open("cookiekit/__init__.py", encoding="utf8") as init_file:
        for line in init_file:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"')
    raise RuntimeError("Unable to find the version string")


setup(
    name="cookiekit",
    version=get_version(),
    description=(
        "Data model, parser and change-tracking jar for HTTP cookies, "
        "to embed in HTTP clients and servers"
    ),
    packages=PACKAGES,
    python_requires=">=3.8",
    install_requires=[
        "essentials>=1.1.4",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    license="MIT",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Operating System :: OS Independent",
        "Topic :: Internet :: WWW/HTTP",
    ],
)
