from setuptools import setup, find_packages

setup(
    name="solar-cli",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"solar_cli.config": ["*.yaml"]},
    include_package_data=True,
    install_requires=[
        # Crypto primitives for keys, addresses and Schnorr signatures
        "bip_utils>=2.9.3",
        "coincurve>=18.0.0",
        "pycryptodome>=3.18.0",
        "multiformats>=0.3.1",
        # HTTP client for the relay node API
        "httpx>=0.24.0",
        # Data validation and configuration
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
        # CLI and UI
        "click>=8.1.3",
        "rich>=13.0.0",
        # Logging
        "coloredlogs>=15.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "solar-cli=solar_cli.cli.main:main",
        ],
    },
    description="Command line client for Solar network relay nodes: queries, message signing and transactions",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
