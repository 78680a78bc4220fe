from setuptools import setup, find_namespace_packages

setup(
    name="legend",
    version="0.1.0",
    description="State-dispatch core and frame loop for the Legend engine",
    author="mseibert",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["core*", "engine*", "states*"]),
    py_modules=["main", "config"],
    python_requires=">=3.10",
    install_requires=[
        "Pillow>=10.0.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
        "numpy",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "legend=main:main",
        ],
    },
)
