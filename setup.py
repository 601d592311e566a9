from setuptools import find_packages, setup

setup(
    name='modargs',
    version='1.0.0',
    packages=find_packages(exclude=['test', 'test.*']),
    description='Parser for single-line key=value module arguments',
    long_description="""
Documentation
-------------
    Parse an arguments file of whitespace separated key[=value] tokens,
    with quoting and backslash escapes, into an ordered list of pairs.

    python -m modargs.cli ARGUMENTS_FILE
    """,
    install_requires=['ergaleia'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.6',
    license='MIT',
)
