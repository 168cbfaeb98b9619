import os
import tempfile
import unittest

import yaml  # For creating test files
from yaml_parser import load_yaml_file, normalize_keys_recursive


class TestYamlParsing(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.test_dir = self._tmp.name

        self.valid_yaml_content = {
            "Social Rules": {"Guilds": "Guilds rule the cities"},
            "characters": [{"id": "aria", "name": "Aria"}],
        }
        self.valid_yaml_filepath = os.path.join(self.test_dir, "valid.yaml")
        with open(self.valid_yaml_filepath, "w", encoding="utf-8") as f:
            yaml.dump(self.valid_yaml_content, f)

        self.malformed_yaml_filepath = os.path.join(self.test_dir, "malformed.yaml")
        with open(self.malformed_yaml_filepath, "w", encoding="utf-8") as f:
            f.write("chapters: id: 1\ntitle: [Gate")  # Missing closing bracket

        self.empty_yaml_filepath = os.path.join(self.test_dir, "empty.yaml")
        with open(self.empty_yaml_filepath, "w", encoding="utf-8") as f:
            f.write("")

        self.non_dict_root_yaml_filepath = os.path.join(
            self.test_dir, "non_dict_root.yaml"
        )
        with open(self.non_dict_root_yaml_filepath, "w", encoding="utf-8") as f:
            f.write("- item1\n- item2")  # Root is a list

    def tearDown(self):
        self._tmp.cleanup()

    def test_load_valid_yaml_normalized_keys(self):
        data = load_yaml_file(self.valid_yaml_filepath, normalize_keys=True)
        self.assertIsNotNone(data)
        self.assertIn("social_rules", data)
        if data:  # for mypy
            self.assertEqual(data["social_rules"]["guilds"], "Guilds rule the cities")
            self.assertEqual(data["characters"][0]["name"], "Aria")

    def test_load_valid_yaml_raw_keys(self):
        data = load_yaml_file(self.valid_yaml_filepath, normalize_keys=False)
        self.assertIsNotNone(data)
        self.assertIn("Social Rules", data)
        if data:  # for mypy
            self.assertEqual(data["Social Rules"]["Guilds"], "Guilds rule the cities")

    def test_load_non_existent_file(self):
        data = load_yaml_file(os.path.join(self.test_dir, "non_existent.yaml"))
        self.assertIsNone(data)

    def test_load_wrong_extension(self):
        data = load_yaml_file(os.path.join(self.test_dir, "story.json"))
        self.assertIsNone(data)

    def test_load_malformed_yaml(self):
        data = load_yaml_file(self.malformed_yaml_filepath)
        self.assertIsNone(data)

    def test_load_empty_yaml(self):
        data = load_yaml_file(self.empty_yaml_filepath)
        self.assertEqual(data, {})

    def test_load_non_dict_root_yaml(self):
        data = load_yaml_file(self.non_dict_root_yaml_filepath)
        self.assertIsNone(data)

    def test_normalize_keys_recursive(self):
        data = {
            "First Key": {"Second Level Key": "value1"},
            "Another Top Key": [{"List Key One": 1}, {"List Key Two": 2}],
        }
        normalized = normalize_keys_recursive(data)
        expected = {
            "first_key": {"second_level_key": "value1"},
            "another_top_key": [{"list_key_one": 1}, {"list_key_two": 2}],
        }
        self.assertEqual(normalized, expected)


if __name__ == "__main__":
    unittest.main()
