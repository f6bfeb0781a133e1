# setup.py
from setuptools import setup, find_packages

setup(
    name="archscript",
    version="0.3.0",
    description="ArchScript: a small expression language with an interpreter, REPL and language server",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.0,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "archscript=archscript.repl:main",
            "archscript-ls=archscript_lsp.server:main",
        ],
    },
    zip_safe=False,
)
