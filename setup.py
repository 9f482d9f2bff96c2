from setuptools import setup, find_packages

setup(
    name="mkdocs-doxymd",
    version="0.1.0",
    description="Doxygen comment tags to Markdown, for C headers and MkDocs pages",
    keywords="mkdocs doxygen markdown c headers documentation bindings",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "mkdocs>=1.4",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Documentation",
        "Topic :: Software Development :: Documentation",
        "Framework :: MkDocs",
    ],
    entry_points={
        "mkdocs.plugins": [
            "doxymd = mkdocs_doxymd.plugin:DoxymdPlugin",
        ],
    },
)
