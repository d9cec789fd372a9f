#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Build an installable package."""

from pathlib import Path

from setuptools import find_packages, setup

herepath = Path(__file__).parent.absolute()
here = str(herepath)

MODULE_NAME = 'appdesk'
DISTRO_NAME = 'appimage-desk'
DESCRIPTION = 'Register a self-contained Linux application bundle with the desktop environment'
URL = 'https://github.com/thocoo/appimage-desk'
EMAIL = 'thomas.cools@telenet.be'
AUTHOR = 'Thomas Cools'
VERSION = '0.3.0'

modpath = herepath / 'appdesk'

REQUIRED = [
    'numpy',
    'imageio>=2.16',
    'packaging',
]

EXTRAS = {
    'test': ['pytest'],
}

PYTHON_REQUIRED = '>=3.8'

def get_resources():
    found_resources = []

    found_resources.append(str(modpath / 'config' / 'defaults.json'))

    return found_resources

# Import the README and use it as the long-description.
with open(herepath / 'README.md', encoding='utf-8') as fp:
    LONG_DESCRIPTION = '\n' + fp.read()

setup(
    name=DISTRO_NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    author=AUTHOR,
    author_email=EMAIL,
    license='Apache License 2.0',
    url=URL,
    packages=find_packages(exclude=('tests',)),
    package_data=dict(appdesk=get_resources(),),
    entry_points={'console_scripts': [f'{MODULE_NAME} = {MODULE_NAME}.console:argexec']},
    install_requires=REQUIRED,
    extras_require=EXTRAS,
    include_package_data=True,
    python_requires=PYTHON_REQUIRED,
    classifiers=[
        # Trove classifiers
        # Full list: https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
)
