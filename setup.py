# setup.py
from setuptools import setup, find_packages

setup(
    name="eth-wallet-server",
    version="0.1.0",  # Match eth_wallet_server.__version__
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "web3>=7.0",
        "eth-account>=0.13",
        "aiohttp>=3.9",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.1",
            "pytest-mock>=3.10",
            "httpx>=0.25",
            "rlp>=3.0",
            "black>=23.0",
            "isort>=5.12",
            "flake8>=6.0",
            "mypy>=1.0"
        ],
    },
    entry_points={
        "console_scripts": [
            "eth-wallet-server=eth_wallet_server.cli.cli:main",
        ],
    },
    author="Your Name",
    author_email="your.email@example.com",
    description="A minimal REST gateway for an Ethereum wallet",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/eth-wallet-server",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
