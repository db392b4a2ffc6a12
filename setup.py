"""Setup file for project"""


from setuptools import setup, find_namespace_packages

with open("README.md", 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name                            = "sinaica",
    version                         = "0.1.0",
    description                     = "Air-quality catalog and pollutant series from the SINAICA portal",
    long_description                = long_description,
    long_description_content_type   = "text/markdown",
    packages                        = find_namespace_packages(include=["src", "src.*"]),
    install_requires                = [
        "requests>=2.31",
        "urllib3>=2.0",
        "beautifulsoup4>=4.12",
        "pandas>=2.0",
        "python-dotenv>=1.0",
        "colorama>=0.4.6",
        "tqdm>=4.66",
    ],
    extras_require                  = {
        "test": ["pytest>=7.4"],
    },
    entry_points                    = {
        "console_scripts": ["sinaica=src.sinaica.cli:main"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",           # Minimum Python version
)
