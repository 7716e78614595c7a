"""Command-line training of a digit classifier on the MNIST data set."""

from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack
from pathlib import Path

import numpy as np

from tinynet.activation import ActivationType
from tinynet.loss import cross_entropy, cross_entropy_grad, mse, mse_grad
from tinynet.mnist import MNISTFormatError, load_mnist
from tinynet.model import Model
from tinynet.optimizer import Optimizer
from tinynet.serialization import save_model

_CLASSES = 10
_BAR_WIDTH = 30

_MENU = (
    "Select model architecture:\n"
    "1. One hidden layer (ReLU + Identity)\n"
    "2. Two hidden layers (ReLU + Sigmoid + Identity)\n"
    "3. Three hidden layers (ReLU + ReLU + ReLU + Softmax)"
)


def build_model(choice: int) -> Model:
    """Build the architecture for menu ``choice``.

    Any choice other than 1 or 2 gives the three-hidden-layer softmax network.
    """
    if choice == 1:
        return Model([784, 128, 10], [ActivationType.RELU, ActivationType.IDENTITY])
    if choice == 2:
        return Model(
            [784, 128, 64, 10],
            [ActivationType.RELU, ActivationType.SIGMOID, ActivationType.IDENTITY],
        )
    return Model(
        [784, 128, 64, 32, 10],
        [
            ActivationType.RELU,
            ActivationType.RELU,
            ActivationType.RELU,
            ActivationType.SOFTMAX,
        ],
    )


def one_hot(label: int, classes: int = _CLASSES) -> np.ndarray:
    """Return a vector of ``classes`` zeros with a one at ``label``."""
    label = int(label)
    if not 0 <= label < classes:
        raise ValueError(f"label {label} is outside 0..{classes - 1}")
    target = np.zeros(classes)
    target[label] = 1.0
    return target


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tinynet", description="Train a small dense network on MNIST."
    )
    parser.add_argument("--data-dir", default="../data", type=Path,
                        help="directory holding the MNIST IDX files")
    parser.add_argument("--output-dir", default=".", type=Path,
                        help="directory for the CSV logs and the saved model")
    parser.add_argument("--choice", type=int, help="model architecture (1, 2 or 3)")
    parser.add_argument("--epochs", type=int, help="number of training epochs")
    return parser.parse_args(argv)


def _ask_int(prompt: str) -> int:
    text = input(prompt)
    try:
        return int(text.strip())
    except ValueError:
        raise ValueError(f"expected a whole number, got {text!r}") from None


def _mean(total: float, count: int) -> float:
    return total / count if count else float("nan")


def _progress(done: int, total: int, mean_loss: float) -> str:
    fraction = done / total
    filled = int(_BAR_WIDTH * fraction)
    bar = "=" * filled + " " * (_BAR_WIDTH - filled)
    percent = int(fraction * 100.0)
    return f"\r[{bar}] {percent:3d}% ({done}/{total}) L:{mean_loss:.4f}"


def main(argv: list[str] | None = None) -> int:
    """Load MNIST, train the chosen model, log per-epoch metrics and save it."""
    args = _parse_args(argv)

    data = args.data_dir
    try:
        train_images, train_labels = load_mnist(
            data / "train-images.idx3-ubyte", data / "train-labels.idx1-ubyte"
        )
        test_images, test_labels = load_mnist(
            data / "t10k-images.idx3-ubyte", data / "t10k-labels.idx1-ubyte"
        )
    except (OSError, MNISTFormatError):
        print("Failed to load MNIST data!", file=sys.stderr)
        return 1

    train_targets = [one_hot(label) for label in train_labels]
    test_targets = [one_hot(label) for label in test_labels]

    try:
        choice = args.choice
        if choice is None:
            print(_MENU)
            choice = _ask_int("Enter choice (1/2/3): ")
        epochs = args.epochs
        if epochs is None:
            epochs = _ask_int("Enter number of training epochs: ")
    except (ValueError, EOFError) as err:
        print(f"Invalid input: {err}", file=sys.stderr)
        return 2

    model_name = f"model{choice}"
    model = build_model(choice)
    optimizer = Optimizer.adam(0.001, 0.9, 0.999, 1e-8)
    if choice == 3:
        loss_fn, loss_grad = cross_entropy, cross_entropy_grad
    else:
        loss_fn, loss_grad = mse, mse_grad

    out_dir = args.output_dir
    out_dir.mkdir(parents=True, exist_ok=True)
    print(f"\n=== Training {model_name} for {epochs} epoch(s) ===")

    rng = np.random.default_rng()
    n_train = len(train_images)
    n_test = len(test_images)

    with ExitStack() as stack:
        train_log = stack.enter_context(
            open(out_dir / f"loss_{model_name}_train.csv", "w", encoding="ascii")
        )
        val_log = stack.enter_context(
            open(out_dir / f"loss_{model_name}_val.csv", "w", encoding="ascii")
        )
        acc_log = stack.enter_context(
            open(out_dir / f"accuracy_{model_name}.csv", "w", encoding="ascii")
        )
        train_log.write("Epoch,Loss\n")
        val_log.write("Epoch,Loss\n")
        acc_log.write("Epoch,Accuracy\n")

        for epoch in range(1, epochs + 1):
            running_loss = 0.0
            for done, idx in enumerate(rng.permutation(n_train), start=1):
                image, target = train_images[idx], train_targets[idx]
                model.train_step(image, target, loss_grad, optimizer)
                running_loss += loss_fn(model.forward(image), target)
                sys.stdout.write(_progress(done, n_train, running_loss / done))
                sys.stdout.flush()

            avg_train_loss = _mean(running_loss, n_train)
            train_log.write(f"{epoch},{avg_train_loss:g}\n")

            val_loss = 0.0
            correct = 0
            for image, target, label in zip(test_images, test_targets, test_labels):
                out = model.forward(image)
                val_loss += loss_fn(out, target)
                if int(np.argmax(out)) == int(label):
                    correct += 1

            avg_val_loss = _mean(val_loss, n_test)
            accuracy = _mean(100.0 * correct, n_test)
            val_log.write(f"{epoch},{avg_val_loss:g}\n")
            acc_log.write(f"{epoch},{accuracy:g}\n")

            print(
                f"\nEpoch {epoch} finished. Train Loss: {avg_train_loss:.4f}, "
                f"Val Loss: {avg_val_loss:.4f}, Accuracy: {accuracy:.4f}%"
            )

    save_model(model, out_dir / f"model_{model_name}.bin")
    return 0


if __name__ == "__main__":
    sys.exit(main())