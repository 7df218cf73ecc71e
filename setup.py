"""Set-up file for GeomKernel for installations using ``pip install .``"""
from setuptools import find_packages, setup


with open("requirements.txt") as f:
    required = f.read().splitlines()


setup(
    name="geomkernel",
    version="0.3.0",
    license="GPL",
    keywords=["computational geometry tolerance intersection plane polygon"],
    install_requires=required,
    extras_require={"testing": ["pytest", "scipy"]},
    description="Tolerance based 2d and 3d geometry primitives and relations",
    platforms=["Linux", "Windows", "Mac OS-X"],
    package_data={"geomkernel": ["py.typed"]},
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    zip_safe=False,
)
