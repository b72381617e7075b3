import setuptools

setuptools.setup(
    name='fishcomp',
    version='0.1',
    license='MIT',
    zip_safe=False,
    packages=setuptools.find_packages(include=['fishcomp', 'fishcomp.*']),
    fullname='fishcomp',
    install_requires=[
        'pyyaml', 'rich'
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['fishcomp=fishcomp.main:main'],
    },
    description='Generates fish shell completion scripts from a declarative command tree.',
)
