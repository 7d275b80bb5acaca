"""Unit tests for configuration and label loading."""

from pathlib import Path

import pytest

from sound_inference.config import InferenceConfig
from sound_inference.framework import Framework
from sound_inference.labels import label_for, load_labels


class TestInferenceConfig:
    """Tests for InferenceConfig."""

    def test_defaults(self):
        config = InferenceConfig()
        assert config.model_dir == Path("assets")
        assert config.num_classes == 521
        assert config.sample_rate == 16000
        assert config.warmup_iterations == 5
        assert config.benchmark_iterations == 50
        assert not config.simulate

    @pytest.mark.parametrize(
        ("framework", "filename"),
        [
            (Framework.TFLITE_CPU, "yamnet.tflite"),
            (Framework.TFLITE_METAL, "yamnet.tflite"),
            (Framework.ONNX_RUNTIME, "yamnet.onnx"),
            (Framework.COREML, "yamnet.mlpackage"),
            (Framework.PYTORCH_MOBILE, "yamnet.ptl"),
        ],
    )
    def test_model_path(self, framework, filename):
        config = InferenceConfig(model_dir=Path("/models"))
        assert config.model_path(framework) == Path("/models") / filename

    def test_delegate_libraries_not_shared(self):
        """Each config owns its delegate mapping."""
        first = InferenceConfig()
        first.delegate_libraries[Framework.TFLITE_GPU] = "custom.so"
        assert InferenceConfig().delegate_libraries[Framework.TFLITE_GPU] != "custom.so"

    def test_from_env(self):
        config = InferenceConfig.from_env(
            {
                "SOUND_INFERENCE_MODEL_DIR": "/opt/models",
                "SOUND_INFERENCE_MODEL_NAME": "yamnet_int8",
                "SOUND_INFERENCE_LABELS": "/opt/models/classes.csv",
                "SOUND_INFERENCE_WARMUP_ITERATIONS": "1",
                "SOUND_INFERENCE_BENCHMARK_ITERATIONS": "7",
                "SOUND_INFERENCE_SIMULATE": "yes",
            }
        )

        assert config.model_dir == Path("/opt/models")
        assert config.model_name == "yamnet_int8"
        assert config.labels_path == Path("/opt/models/classes.csv")
        assert config.warmup_iterations == 1
        assert config.benchmark_iterations == 7
        assert config.simulate

    def test_overrides_win_over_env(self):
        config = InferenceConfig.from_env({"SOUND_INFERENCE_BENCHMARK_ITERATIONS": "7"}, benchmark_iterations=3)
        assert config.benchmark_iterations == 3

    def test_empty_env(self):
        assert InferenceConfig.from_env({}) == InferenceConfig()


class TestLabels:
    """Tests for class map loading."""

    def test_class_map_csv(self, tmp_path):
        path = tmp_path / "yamnet_class_map.csv"
        path.write_text("index,mid,display_name\n1,/m/0ytgt,Dog\n0,/m/09x0r,Speech\n2,/m/07r04,\"Car, passing\"\n")

        assert load_labels(path) == ["Speech", "Dog", "Car, passing"]

    def test_headerless_file(self, tmp_path):
        path = tmp_path / "labels.csv"
        path.write_text("Speech\nDog\n")
        assert load_labels(path) == ["Speech", "Dog"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "labels.csv"
        path.write_text("")
        assert load_labels(path) == []

    @pytest.mark.parametrize(("index", "expected"), [(0, "Speech"), (1, "Dog"), (-1, "Unknown"), (5, "Unknown")])
    def test_label_for(self, index, expected):
        assert label_for(["Speech", "Dog"], index) == expected

    def test_label_without_labels(self):
        assert label_for(None, 0) == "Unknown"
