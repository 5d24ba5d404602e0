"""
命令行接口测试
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from frame_profile_tool.cli.main import main
from frame_profile_tool.cli.validators import parse_output_formats, validate_frame_range

from sample_profiles import make_profile_json


class TestValidators(unittest.TestCase):
    """测试参数验证"""

    def test_parse_output_formats(self):
        self.assertEqual(parse_output_formats('csv'), ['csv'])
        self.assertEqual(parse_output_formats('csv, xlsx'), ['csv', 'xlsx'])

    def test_invalid_output_formats(self):
        for spec in ('', 'json', 'csv,csv', 'csv,'):
            with self.assertRaises(ValueError):
                parse_output_formats(spec)

    def test_validate_frame_range(self):
        self.assertEqual(validate_frame_range(None, None, 5, 8), (5, 8))
        self.assertEqual(validate_frame_range(6, None, 5, 8), (6, 8))
        self.assertEqual(validate_frame_range(None, 7, 5, 8), (5, 7))
        with self.assertRaises(ValueError):
            validate_frame_range(7, 6, 5, 8)


class TestMain(unittest.TestCase):
    """测试 main 入口"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.profile_path = os.path.join(self.temp_dir.name, 'profile.json')
        with open(self.profile_path, 'w', encoding='utf-8') as f:
            json.dump(make_profile_json(first=5, last=8), f)
        self.output_dir = os.path.join(self.temp_dir.name, 'out')

    def tearDown(self):
        self.temp_dir.cleanup()

    def _main(self, argv):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            exit_code = main(argv)
        return exit_code, stdout.getvalue()

    def test_analyze_writes_csv_files(self):
        exit_code, _ = self._main(['analyze', self.profile_path, '--output-dir', self.output_dir])

        self.assertEqual(exit_code, 0)
        self.assertEqual(sorted(os.listdir(self.output_dir)), [
            'cpu.csv', 'hierarchy.csv', 'hierarchy_item.csv', 'memory.csv', 'rendering.csv',
        ])
        with open(os.path.join(self.output_dir, 'cpu.csv'), encoding='utf-8') as f:
            self.assertEqual(len(f.read().splitlines()), 4)

    def test_analyze_frame_range_and_xlsx(self):
        exit_code, _ = self._main([
            'analyze', self.profile_path, '--output-dir', self.output_dir,
            '--first', '6', '--last', '7', '--output-format', 'csv,xlsx',
        ])

        self.assertEqual(exit_code, 0)
        self.assertTrue(os.path.exists(os.path.join(self.output_dir, 'profile.xlsx')))
        with open(os.path.join(self.output_dir, 'rendering.csv'), encoding='utf-8') as f:
            self.assertEqual(f.read(), 'frame,batches,setPassCall,triangles,vertices\n6,42,7,0,0\n')

    def test_analyze_print_summary(self):
        exit_code, output = self._main([
            'analyze', self.profile_path, '--output-dir', self.output_dir, '--print-summary',
        ])
        self.assertEqual(exit_code, 0)
        self.assertIn('=== cpu ===', output)
        self.assertIn('scripts', output)

    def test_analyze_out_of_range_writes_nothing(self):
        exit_code, output = self._main([
            'analyze', self.profile_path, '--output-dir', self.output_dir, '--last', '20',
        ])
        self.assertEqual(exit_code, 1)
        self.assertIn('错误', output)
        self.assertFalse(os.path.exists(self.output_dir))

    def test_analyze_output_dir_is_a_file(self):
        blocker = os.path.join(self.temp_dir.name, 'blocker')
        with open(blocker, 'w', encoding='utf-8') as f:
            f.write('')

        exit_code, output = self._main(['analyze', self.profile_path, '--output-dir', blocker])
        self.assertEqual(exit_code, 1)
        self.assertIn('错误: 写入输出文件失败', output)

    def test_analyze_infinite_statistic(self):
        with open(self.profile_path, 'w', encoding='utf-8') as f:
            data = make_profile_json(first=5, last=8)
            data['frames'][1]['statistics']['Memory']['Total Allocated'] = float('inf')
            json.dump(data, f)

        exit_code, output = self._main(['analyze', self.profile_path, '--output-dir', self.output_dir])
        self.assertEqual(exit_code, 1)
        self.assertIn('错误', output)
        self.assertFalse(os.path.exists(self.output_dir))

    def test_analyze_missing_file(self):
        exit_code, _ = self._main(['analyze', os.path.join(self.temp_dir.name, 'missing.json')])
        self.assertEqual(exit_code, 1)

    def test_analyze_invalid_output_format(self):
        exit_code, _ = self._main(['analyze', self.profile_path, '--output-format', 'json'])
        self.assertEqual(exit_code, 1)

    def test_stats(self):
        exit_code, output = self._main(['stats', self.profile_path])
        self.assertEqual(exit_code, 0)
        self.assertIn('[CPU]', output)
        self.assertIn('Scripts', output)
        self.assertIn('scripts', output)

    def test_no_command(self):
        exit_code, _ = self._main([])
        self.assertEqual(exit_code, 1)


if __name__ == '__main__':
    unittest.main()
