# setup.py
from setuptools import setup, find_packages

setup(
    name="frothy",
    version="0.2.0",
    description="A Forth-like postfix stack language interpreter",
    packages=find_packages(include=["frothy", "frothy.*", "frothy_lsp", "frothy_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": [
            "frothy=frothy.cli:main",
            "frothy-ls=frothy_lsp.server:main",
            "frothy-repl-server=frothy_lsp.repl_server:main",
        ],
    },
    zip_safe=False,
)
