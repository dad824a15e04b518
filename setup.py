from setuptools import setup
from augurkcli import __version__

setup(
    name="augurkcli",
    long_description="The Augurk CLI (augurkcli) is a command line tool for publishing Gherkin feature files "
    "to Augurk and managing the features published there.",
    version=__version__,
    packages=[
        "augurkcli",
        "augurkcli.commands",
        "augurkcli.readers",
        "augurkcli.data_classes",
        "augurkcli.api",
    ],
    include_package_data=True,
    install_requires=[
        "click==8.0.3",
        "pyyaml>=6.0.0,<7.0.0",
        "pyserde==0.12.*",
        "requests>=2.31.0,<3.0.0",
        "tqdm>=4.65.0,<5.0.0",
        "beartype>=0.17.0,<1.0.0",
        "gherkin-official>=29.0.0,<30.0.0",
        "Pillow>=10.0.0,<12.0.0",
    ],
    extras_require={
        "tests": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
            "requests-mock>=1.11.0",
        ],
    },
    entry_points="""
        [console_scripts]
        augurkcli=augurkcli.cli:cli
    """,
)
