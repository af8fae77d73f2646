from setuptools import setup, find_packages

setup(
    name="pyxxh64",
    version="0.1.0",
    description="Pure-Python XXH64: one-shot and streaming 64-bit non-cryptographic hashing, with key and columnar helpers.",
    long_description=open("Readme.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[],
    extras_require={
        "dataframes": ["pandas"],
        "arrow": ["pyarrow"],
        "polars": ["polars"],
        "test": ["pytest", "xxhash"],
    },
    entry_points={
        "console_scripts": ["pyxxh64=pyxxh64.cli:main"],
    },
    python_requires=">=3.7",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    zip_safe=False,
)
