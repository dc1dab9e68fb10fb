import setuptools

setuptools.setup(
    name='instant-timeline',
    version='0.1',
    author='XuZhen86',
    packages=setuptools.find_namespace_packages(include=['instant_timeline', 'instant_timeline.*']),
    python_requires='>=3.11,<4',
    install_requires=[
        'absl-py>=2.1.0,<3',
        'jsonschema>=4.23.0,<5',
    ],
    extras_require={
        'test': ['pytest>=8.0.0'],
    },
    entry_points={
        'console_scripts': [
            'instant-timeline = instant_timeline.main:app_run_main',
        ],
    },
)
