from setuptools import setup, find_packages
import io
import os
import re

here = os.path.abspath(os.path.dirname(__file__))

def read(*filenames, **kwargs):
    encoding = kwargs.get('encoding', 'utf-8')
    sep = kwargs.get('sep', '\n')
    buf = []
    for filename in filenames:
        with io.open(os.path.join(here, filename), encoding=encoding) as f:
            buf.append(f.read())
    return sep.join(buf)

long_description = read('README.rst')

version = re.search(r"^__version__ = '([^']+)'",
                    read('pegmark/__init__.py'), re.M).group(1)

setup(
    name='pegmark',
    version=version,
    license='MIT',
    author='Brendan Abel',
    author_email='007brendan@gmail.com',
    description='Markdown converter that renders to HTML, LaTeX and groff while it parses.',
    long_description=long_description,
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    platforms='any',
    python_requires='>=3.7',
    entry_points={
        'console_scripts': [
            'pegmark = pegmark.__main__:main',
        ],
    },
    classifiers=[
        'Programming Language :: Python',
        'Development Status :: 4 - Beta',
        'Natural Language :: English',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: Text Processing :: Markup',
        'Topic :: Text Processing :: Markup :: HTML',
        'Topic :: Text Processing :: Markup :: LaTeX',
        ],
    extras_require={
        'testing': ['pytest'],
    }
)
