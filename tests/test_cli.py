"""
Test Suite for the Command-Line Interface
"""

import json

import pytest

from cli import CLI
from rowgen.config import MAX_THREADS, OutputMode


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({
        "table_name": "orders",
        "fields": [
            {"name": "id", "data_type": "int", "generator": "integer", "min": 0, "max": 100},
            {"name": "status", "data_type": "char", "generator": "choice", "choices": ["NEW", "OLD"]},
        ],
    }), encoding="utf-8")
    return path


@pytest.fixture
def cli(reset_rowgen_logger):
    return CLI()


class TestBuildConfig:
    """Test command-line overrides"""

    def test_threads_clamped(self, cli, schema_file, caplog):
        args = cli.parser.parse_args(["generate", str(schema_file), "-t", "500"])
        config = cli.build_config(args)

        assert config.generation.num_threads == MAX_THREADS
        assert "Max number of threads" in caplog.text

    def test_overrides(self, cli, schema_file):
        args = cli.parser.parse_args([
            "generate", str(schema_file), "-n", "5000", "-b", "250", "-t", "4",
            "-o", "object_storage", "-f", "bucket:orders.csv", "--header", "-s", "3",
        ])
        config = cli.build_config(args)

        assert config.generation.num_rows == 5000
        assert config.generation.batch_size == 250
        assert config.generation.display_header
        assert config.generation.seed == 3
        assert config.output.mode == OutputMode.OBJECT_STORAGE
        assert config.output.output_file == "bucket:orders.csv"

    def test_unknown_output_mode(self, cli, schema_file):
        args = cli.parser.parse_args(["generate", str(schema_file), "-o", "fax"])
        assert cli.build_config(args).output.mode == OutputMode.NONE

    def test_config_file(self, cli, schema_file, tmp_path):
        config_path = tmp_path / "run.yaml"
        cli.run(["config", "create", str(config_path)])

        args = cli.parser.parse_args(["generate", str(schema_file), "-c", str(config_path), "-n", "20"])
        config = cli.build_config(args)

        assert config.generation.num_rows == 20
        assert config.generation.batch_size == 100


class TestCommands:
    """Test running commands end to end"""

    def test_generate_to_stdout(self, cli, schema_file, capsys):
        cli.run(["generate", str(schema_file), "-n", "20", "-b", "10", "--header"])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "id,status"
        assert len(lines) == 21
        assert all(line.split(",")[1] in ("NEW", "OLD") for line in lines[1:])

    def test_generate_to_file(self, cli, schema_file, tmp_path):
        output = tmp_path / "orders.csv"
        cli.run(["generate", str(schema_file), "-n", "40", "-b", "10", "-t", "2", "-o", "file", "-f", str(output)])

        assert len(output.read_text(encoding="utf-8").splitlines()) == 40

    def test_uneven_batches_exit_code(self, cli, schema_file):
        with pytest.raises(SystemExit) as exc_info:
            cli.run(["generate", str(schema_file), "-n", "100", "-b", "10", "-t", "3"])
        assert exc_info.value.code == 1

    @pytest.mark.parametrize("body", [
        "generation:\n  bogus: 1\n",
        "generation: {num_rows: 10\n",
        "logging:\n  level: LOUD\n",
    ])
    def test_bad_config_file_exit_code(self, cli, schema_file, tmp_path, body):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text(body, encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            cli.run(["generate", str(schema_file), "-c", str(config_path), "-n", "20", "-b", "10"])
        assert exc_info.value.code == 1

    def test_missing_schema_exit_code(self, cli, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            cli.run(["preview", str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1

    def test_preview(self, cli, schema_file, capsys):
        cli.run(["preview", str(schema_file), "-r", "3", "-s", "1"])

        err = capsys.readouterr().err
        assert "orders" in err
        assert "choice" in err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
