from setuptools import setup, find_packages

setup(
    name='rademacher-tree',
    version='1.0',
    packages=find_packages(include=['data_structures', 'data_structures.*']),
    py_modules=[
        'predictor',
        'scoring',
        'split_search',
        'training_context',
        'tree_builder',
    ],
    description='Decision-tree weak learner with a Rademacher-complexity split criterion',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    python_requires='>=3.9',
    install_requires=['numpy'],
    extras_require={'test': ['pytest']},
)
