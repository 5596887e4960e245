"""
Setup script for ontouml-abstractor: abstraction of OntoUML conceptual models
"""

from setuptools import setup, find_packages

setup(
    name="ontouml-abstractor",
    version="1.0.0",
    description="Abstraction of OntoUML class diagrams by folding parts, subtypes and aspects",
    long_description="Graph rewrite engine that simplifies OntoUML diagrams following the ontology-based model abstraction rules",
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src", exclude=["tests*", "docs*", "examples*"]),
    python_requires=">=3.9",
    install_requires=[
        # Core dependencies
        "pydantic>=2.11.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",

        # Graph inspection
        "networkx>=3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "isort>=5.10.0",
            "mypy>=1.0.0",
            "flake8>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ontoabstract=ontoabstract.cli:main",
        ],
    },
    include_package_data=True,
    author="OntoAbstract Team",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Information Analysis",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="ontouml conceptual-modeling model-abstraction ontology uml",
)
