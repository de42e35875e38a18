"""Package build script"""
import setuptools

with open("./VERSION", "r", encoding="utf-8") as fh:
    __version__ = fh.read().strip()

with open("./README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="geoinverse",
    version=__version__,
    author="",
    author_email="",
    description="Cartesian to geodetic conversion by Heikkinen's and Olson's methods.",
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(
        include=('geoinverse*', ),
        exclude=('*tests', 'tests*')
    ),
    package_data={"geoinverse": ["py.typed"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent"
    ],
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
