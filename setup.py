from setuptools import setup

setup(
    name='stepwise-interpreter',
    version='0.1.0',
    description='Asynchronous tree-walking evaluator for the step language',
    author='Stepwise contributors',
    package_dir={'': 'src'},
    packages=['stepwise', 'stepwise.evaluator', 'stepwise.cli'],
    python_requires='>=3.8',
    install_requires=[
        'click>=7.0',
        'rich>=9.0'
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'stepwise = stepwise.cli.main:cli'
        ]
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
