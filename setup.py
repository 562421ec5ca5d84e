"""Access logging for WSGI applications, driven by compact,
precompiled templates such as ``:method :url :status :response-time ms``.
"""

import sys
from setuptools import setup, find_packages


__author__ = 'httplogger contributors'
__version__ = '0.1.0'
__url__ = 'https://github.com/httplogger/httplogger'
__license__ = 'BSD'

desc = ('Access logging middleware for WSGI applications, with'
        ' precompiled, extensible log-line templates.')


if sys.version_info < (3, 7):
    raise NotImplementedError("Sorry, httplogger only supports Python >=3.7")


setup(name='httplogger',
      version=__version__,
      description=desc,
      long_description=__doc__,
      author=__author__,
      url=__url__,
      packages=find_packages(),
      install_requires=['boltons>=20.0.0'],
      extras_require={'test': ['pytest']},
      python_requires='>=3.7',
      include_package_data=True,
      zip_safe=False,
      license=__license__,
      platforms='any',
      classifiers=[
          'Intended Audience :: Developers',
          'Topic :: System :: Logging',
          'Topic :: Internet :: WWW/HTTP :: WSGI :: Middleware',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python :: Implementation :: CPython',
          'Programming Language :: Python :: Implementation :: PyPy',
      ]
)


"""
A brief checklist for release:

* pytest
* git commit (if applicable)
* Bump setup.py version off of -dev
* git commit -a -m "bump version for x.y.z release"
* python -m build && twine upload dist/*
* git commit
* git tag -a x.y.z -m "brief summary"
* write CHANGELOG
* git commit
* bump setup.py version onto n+1 dev
* git commit
* git push

"""
