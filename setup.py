from setuptools import setup, find_packages

setup(
    name="mkdocs-docjs",
    version="1.0.0",
    description="MkDocs plugin for JavaScript API docs from documentation.js comments",
    keywords="mkdocs documentation.js jsdoc javascript markdown documentation python",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "mkdocs>=1.4",
        "Markdown>=3.3",
        "Pygments>=2.12",
        "PyYAML>=5.1",
    ],
    extras_require={
        "test": ["pytest>=7"],
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
            "docjs = mkdocs_docjs.plugin:DocjsPlugin",
        ],
        "console_scripts": [
            "docjs-markdown = mkdocs_docjs.convert:main",
        ],
    },
)
