from setuptools import setup, find_packages

setup(
    name="event-scheduler",
    version="0.1.0",
    description="Priority event scheduler with flat-file persistence",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "python-dotenv>=1.0.0",
        "loguru>=0.7.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "event-scheduler=event_scheduler.main:main",
        ],
    },
)
