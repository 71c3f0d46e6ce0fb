from setuptools import setup, find_packages

setup(
    name="tiktok-scraper",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "httpx[brotli]>=0.25.0",
        "pydantic>=2.6.0",
        "python-dotenv>=1.0.0",
        "beautifulsoup4>=4.12.0",
        "playwright>=1.40.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tiktok-scraper=tiktok_scraper.cli:main",
        ],
    },
)
