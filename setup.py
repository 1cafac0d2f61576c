
from setuptools import setup, find_packages

setup(
    name='proxlib',
    version='0.1',
    description='Proximable functions and separable sums for convex optimization',
    keywords='convex optimization proximal operator',
    packages=find_packages(exclude=['tests', 'examples']),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    install_requires=['numpy','numba','scipy'],
    extras_require={ 'tests': ['pytest'], },
)
