from setuptools import setup

setup(
    name='tile-merge-2048',
    version='0.1.0',
    python_requires='>=3.9',
    packages=['tile_merge',
              'tile_merge.config',
              'tile_merge.env',
              'tile_merge.interface',
              'tile_merge.utils'],
    install_requires=[
        'flax',
        'google-cloud-storage',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
