#!/usr/bin/env python

from setuptools import find_packages, setup

from davreq._version import __version__

version = __version__


try:
    readme = open("README.md", "rt", encoding="utf-8").read()
except IOError:
    readme = "(Readme file not found. Running from tox/setup.py test?)"

install_requires = ["json5", "PyYAML", "requests"]
tests_require = ["pytest"]

setup(
    name="davreq",
    version=version,
    author="Martin Wendt and contributors",
    description="Request preparation helpers for WebDAV clients",
    long_description=readme,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="webdav client http request url",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=install_requires,
    py_modules=[],
    zip_safe=False,
    extras_require={"test": tests_require},
)
