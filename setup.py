from setuptools import setup, find_packages

setup(
    name='hexit',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=['pyarrow', 'colorama'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'hexit=hexit.cli:main'  # Entry point to the command-line program
        ]
    },
    author='Hexit Team',
    description='A small language for writing out bytes in hex, strings and typed numbers',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='LGPLv3.0',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.7',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
    python_requires='>=3.7',
)
