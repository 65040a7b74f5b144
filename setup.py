"""Setup script for roadgrowth package."""

from setuptools import find_packages, setup

setup(
    name='roadgrowth',
    version='0.1.0',
    author='roadgrowth developers',
    description='Procedural road network growth driven by a timer-ordered query queue',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    package_data={
        'roadgrowth.config': ['*.yaml'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'PyYAML',
    ],
    extras_require={
        'dev': [
            'pytest',
            'flake8',
            'black',
        ],
    },
)
