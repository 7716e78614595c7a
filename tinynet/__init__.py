"""A small NumPy neural network: layers, losses, optimizers, model files and MNIST training."""

__version__ = "0.1.0"