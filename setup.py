from setuptools import setup, find_packages

setup(
    name="simple_chat",
    version="0.1.0",
    description="Desktop one-to-one chat client with local SQLite storage",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "sqlalchemy==2.0.42",
        "aiosqlite==0.21.0",
        "environs==14.2.0",
        "pydantic==2.11.7",
        "dishka==1.6.0"
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23"
        ]
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "simple-chat=simple_chat.main:main"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
