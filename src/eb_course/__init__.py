"""Sample applications for the Elastic Beanstalk zero-to-hero course."""

__version__ = "1.0.0"
