from setuptools import setup, find_packages

setup(
    name="shopmerge",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "beautifulsoup4>=4.12.2",
        "requests>=2.31.0",
        "lxml>=4.9.3",
        "PyYAML>=6.0.1",
        "python-dotenv>=1.0.0",
        "colorlog>=6.7.0",
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "httpx>=0.27.0",  # required by fastapi.testclient
        ],
    },
    entry_points={
        "console_scripts": [
            "shopmerge-server=shopmerge.api.server:main",
        ],
    },
)
