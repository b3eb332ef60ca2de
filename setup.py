#!/usr/bin/env python3

import setuptools

setuptools.setup (
  name                          = "difftex",
  version                       = "1.0",
  license                       = 'BSD',
  keywords                      = "Math LaTeX derivative Taylor series symbolic differentiation",
  description                   = "Symbolic differentiation, Taylor series and simplification of LaTeX formulas with article generation",
  long_description              = "difftex parses a LaTeX-like formula into an expression tree, differentiates it symbolically, simplifies the result, "
    "expands it into a Taylor series and finds tangent lines, then writes everything up as a LaTeX article with matplotlib plots. "
    "The expression tree engine can also be used on its own as a small library.",
  long_description_content_type = "text/plain",
  py_modules                    = ['dast', 'dlexer', 'dparser', 'dmath', 'dsimp', 'dsym', 'dinput', 'darticle', 'dplot', 'difftex'],
  entry_points                  = {'console_scripts': ['difftex = difftex:main']},
  classifiers                   = [
    'Intended Audience :: Education',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: BSD License',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Scientific/Engineering',
    'Topic :: Scientific/Engineering :: Mathematics',
    'Topic :: Text Processing :: Markup :: LaTeX',
  ],
  install_requires              = ['sympy>=1.4'],
  extras_require                = {'plot': ['matplotlib'], 'test': ['matplotlib']},
  python_requires               = '>=3.6',
)
