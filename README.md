# tinynet

A small fully connected neural network built on NumPy. It can be trained on the
MNIST handwritten digits. It provides:

- ReLU, sigmoid, tanh, identity and softmax activations (`tinynet.activation`)
- mean squared error and cross-entropy losses with their gradients (`tinynet.loss`)
- plain gradient descent and Adam optimizers (`tinynet.optimizer`)
- dense layers and a layer stack trained one sample at a time (`tinynet.layer`, `tinynet.model`)
- saving a model to a plain text file and loading it back (`tinynet.serialization`)
- a reader for the MNIST IDX files (`tinynet.mnist`)
- a `tinynet` command that trains a digit classifier (`tinynet.cli`)

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Training on MNIST

By default the command looks for the four MNIST files in `../data/`, relative to
the directory you run it from:

- `train-images.idx3-ubyte`
- `train-labels.idx1-ubyte`
- `t10k-images.idx3-ubyte`
- `t10k-labels.idx1-ubyte`

Then run:

```
tinynet
```

The command asks for an architecture and a number of epochs:

1. One hidden layer (784-128-10, ReLU + Identity), trained with MSE
2. Two hidden layers (784-128-64-10, ReLU + Sigmoid + Identity), trained with MSE
3. Three hidden layers (784-128-64-32-10, ReLU + ReLU + ReLU + Softmax), trained with cross-entropy

Any other number builds the architecture of choice 3 but trains it with MSE.

Both answers can be given as options instead:

```
tinynet --choice 3 --epochs 5 --data-dir path/to/mnist --output-dir runs
```

| Option | Default | Meaning |
| --- | --- | --- |
| `--data-dir` | `../data` | directory holding the MNIST IDX files |
| `--output-dir` | `.` | directory for the CSV logs and the saved model (created if missing) |
| `--choice` | asked | model architecture |
| `--epochs` | asked | number of training epochs |

Every model is trained with Adam (learning rate 0.001, betas 0.9 and 0.999,
epsilon 1e-8). The training samples are shuffled each epoch, and a progress bar
shows the running training loss. After each epoch the model is evaluated on the
test set, and the loss and accuracy are printed. The output directory ends up
holding:

- `loss_model<N>_train.csv`: the mean training loss for each epoch
- `loss_model<N>_val.csv`: the mean test-set loss for each epoch
- `accuracy_model<N>.csv`: the test-set accuracy, in percent, for each epoch
- `model_model<N>.bin`: the trained model, in the text format of `save_model`

The command exits with status 1 when the MNIST files cannot be read or are
malformed, and with status 2 when an answer is not a whole number.

## Using the library

```python
import numpy as np

from tinynet.activation import ActivationType
from tinynet.loss import mse, mse_grad
from tinynet.model import Model
from tinynet.optimizer import Optimizer
from tinynet.serialization import load_model, save_model

model = Model([4, 8, 2], [ActivationType.RELU, ActivationType.IDENTITY])
opt = Optimizer.adam(0.01, 0.9, 0.999, 1e-8)

x = np.array([0.1, 0.2, 0.3, 0.4])
y = np.array([1.0, 0.0])
for _ in range(100):
    model.train_step(x, y, mse_grad, opt)

print(mse(model.forward(x), y))

save_model(model, "model.txt")
restored = load_model("model.txt")
```

`Model.train(xs, ys, epochs, optimizer)` runs `train_step` over every sample in
order for the given number of epochs, always with the squared-error gradient.
`Model.layers()` returns the layers, and `Layer.from_parameters(weights, biases,
activation)` and `Model.from_layers(layers)` build a network from existing
parameters.

The Adam optimizer corrects only the second moment estimate for bias. Softmax
reports a derivative of ones, so it is meant to be paired with
`cross_entropy_grad`, which already accounts for it.

`load_model` raises `ValueError` if the file is truncated or holds something
that is not a number where one is expected.

To read MNIST data yourself, call
`tinynet.mnist.load_mnist(image_file, label_file)`. It returns a 2-D array of
images, one row per image with pixel values scaled to [0, 1], and an array of
integer labels. It raises `MNISTFormatError` if a file has the wrong magic
number, the counts disagree, or the data is truncated.

Layer weights are drawn from a normal distribution with Glorot scaling using
`Random.global_instance()` from `tinynet.random_source`, which is seeded with 42,
so the starting weights are the same on every run.

## What it does not do

Training works on one sample at a time on the CPU; there are no mini-batches,
no convolutional layers and no GPU support. The command only trains and saves a
model: there is no command for loading a saved model and classifying new images,
which has to be done with `load_model` and `Model.forward` from Python.