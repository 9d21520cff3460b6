"""Setup configuration for gotweet-server package."""

from setuptools import setup, find_packages

setup(
    name="gotweet-server",
    version="0.1.0",
    author="Developer",
    description="Post HTTP request bodies to Twitter",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "tweepy>=4.10.0",
        "requests>=2.28.0",
        "python-dotenv>=0.20.0",
        "flask>=2.2.0",
        "werkzeug>=2.2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=22.0.0",
            "pylint>=2.15.0",
            "mypy>=0.990",
        ],
    },
    entry_points={
        "console_scripts": [
            "gotweet-server=gotweet_server.main:main",
        ],
    },
)
