# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Configuration to allow pip install."""

import setuptools


setuptools.setup(
    name="termsrv",
    version="0.1",
    description="Line editing terminal server for serial consoles",
    long_description=(
        "Turns the byte stream from a terminal emulator into edited command "
        "lines with history, tab completion and command dispatch"
    ),
    author="ChromiumOS Authors",
    author_email="chromiumos-dev@chromium.org",
    license="BSD",
    keywords="uart serial console terminal",
    packages=["termsrv"],
    python_requires=">=3.8, <4",
    # List run-time dependencies here.  These will be installed by pip when
    # your project is installed.
    install_requires=[
        "pyserial",
        "PyYAML",
    ],
    # To provide executable scripts, use entry points in preference to the
    # "scripts" keyword. Entry points provide cross-platform support and allow
    # pip to create the appropriate form of executable for the target platform.
    entry_points={
        "console_scripts": [
            "termsrv=termsrv.__main__:main",
        ],
    },
    extras_require={
        "tests": [
            "coverage",
            "pytest",
            "hypothesis",
        ],
    },
)
