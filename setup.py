from setuptools import setup, find_packages

setup(
    name="termline",
    version="0.1.0",
    description="Terminal-aware text wrapping, escape sequence handling and color detection",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "termline = termline.cli:main",
        ],
    },
    python_requires=">=3.12",
)
