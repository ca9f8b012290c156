# setup.py
from setuptools import setup, find_packages

setup(
    name="tack",
    version="0.3.0",
    description="A small concatenative language with quotations, macro expansion and recoverable errors",
    packages=find_packages(include=["tack", "tack.*", "tack_lsp", "tack_lsp.*"]),
    package_data={"tack": ["prelude/*.tk"]},
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.3,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "tack=tack.cli:main",
            "tack-ls=tack_lsp.server:main",
        ],
    },
    zip_safe=False,
)
