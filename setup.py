from setuptools import find_packages, setup

setup(
    name='anvil-harness',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',

    entry_points={
        'console_scripts': [
            'anvil-harness=anvil_harness.main:main',
        ],
    },
    install_requires=[
        'click',
        'eth-typing',
        'eth-utils',
        'hexbytes',
        'mirakuru>=2.0',
        'pyyaml',
        'requests',
        'structlog',
        'web3>=6',
    ],
    extras_require={
        'test': [
            'pytest',
            'responses',
        ],
    },
)
