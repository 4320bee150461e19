from setuptools import setup, find_packages

setup(
    name="sheetiq",
    version="1.0.0",
    packages=find_packages(include=["sheetiq", "sheetiq.*"]),
    install_requires=[
        "pandas>=2.1",
        "numpy>=1.24",
        "matplotlib>=3.7",
        "python-dateutil>=2.8",
        "PyYAML>=6.0",
    ],
    extras_require={
        "llm": [
            "openai>=1.0",
            "google-generativeai>=0.7",
        ],
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sheetiq=sheetiq.cli:main",
        ],
    },
    python_requires=">=3.9",
    description="Data-quality and predictive-analytics engine for spreadsheet datasets",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ]
)
