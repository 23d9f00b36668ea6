import os

# Keras reads this once, on first import
os.environ.setdefault("KERAS_BACKEND", "torch")
