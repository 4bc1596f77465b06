from setuptools import setup, find_packages # type: ignore

setup(
    name="les_diagnostics",
    version="1.0.0",
    packages=find_packages(include=["lesdiag", "lesdiag.*"]),
    install_requires=[
        "numpy",
        "h5py",
        "natsort",
        "matplotlib",
        "scipy",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    description="TKE budget and mixing length diagnostics for horizontally averaged LES statistics",
    python_requires=">=3.9",
)
