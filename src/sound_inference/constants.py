"""Core constants for the sound classification runtimes.

The bundled classifier is YAMNet: 16kHz mono float waveform in,
521 AudioSet class scores out per 0.96s frame.
"""

# Audio format expected by the model
SAMPLE_RATE: int = 16000  # Hz
WINDOW_SAMPLES: int = 15600  # 0.975s, the model's minimum input window

# Model output
NUM_CLASSES: int = 521
MODEL_NAME: str = "yamnet"

# Benchmark defaults
WARMUP_ITERATIONS: int = 5
BENCHMARK_ITERATIONS: int = 50

# Simulated per-call latency of each runtime, used by the fake engine
SIMULATED_LATENCY_MS: dict[str, float] = {
    "tflite_cpu": 50.0,
    "tflite_gpu": 20.0,
    "tflite_nnapi": 25.0,
    "tflite_metal": 15.0,
    "onnx_runtime": 30.0,
    "coreml": 10.0,
    "pytorch_mobile": 35.0,
}
