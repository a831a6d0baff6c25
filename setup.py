# setup.py
from setuptools import setup, find_packages

setup(
    name="s3-acl-sweep",
    version="0.1.0",
    description="Resumable, concurrent canned-ACL sweep over every object in an S3 bucket",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "boto3",
        "botocore",
        "setproctitle>=1.2",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "s3-acl-sweep=acl_sweep.cli:main",
        ],
    },
)
