from setuptools import setup, find_packages

setup(
    name="tubearchivist-client",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "features", "features.*"]),
    include_package_data=True,
    install_requires=[
        "typer",
        "rich",
        "pymonad>=2.4.0",
        "toolz",
        "httpx>=0.24",
        "pydantic>=2.0",
        "PyYAML",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-mock",
            "behave",
            "ruff",
            "setuptools",
            "wheel",
            "twine",
        ]
    },
    entry_points={
        "console_scripts": [
            "tubearchivist = tubearchivist_client.cli:app",
        ],
    },
    description="Browse a TubeArchivist media archive and report watch progress.",
    long_description=open("README.adoc", encoding="utf-8").read(),
    long_description_content_type="text/asciidoc",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Topic :: Multimedia :: Video",
        "Topic :: Internet :: WWW/HTTP",
    ],
    python_requires=">=3.9",
)
