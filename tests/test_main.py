import json
import pytest
from lido_briefing.config import Config
from lido_briefing.main import main
from lido_briefing.reports import ReportRunner


class TestCommandLine:
    """Test cases for the CLI and reports"""

    @pytest.fixture
    def ofp_file(self, tmp_path, sample_ofp):
        path = tmp_path / "ofp.txt"
        path.write_text(sample_ofp)
        return str(path)

    def test_config_validates(self):
        assert Config.validate() is True

    def test_json_output(self, ofp_file, capsys):
        main([ofp_file, '--json'])

        data = json.loads(capsys.readouterr().out)
        assert data['dep_icao'] == 'LOWW'
        assert data['alt_icaos'] == ['OMDB']

    def test_text_output_with_alternates(self, ofp_file, capsys):
        main([ofp_file, '--altn', 'OMDB', 'OMAL', '--altn-buffer', '30'])

        out = capsys.readouterr().out
        assert out.startswith("LOWW -> OMAA (ALTN OMDB, OMAL)")
        assert "1A455/25" in out
        assert "--- ARR WX OMAA ABU DHABI" in out

    def test_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "missing.txt")])

        assert exc.value.code == 1

    def test_reports(self, ofp_file, capsys):
        runner = ReportRunner.from_file(ofp_file)

        for name in ('notams', 'active', 'weather', 'windows'):
            runner.run_predefined_report(name)

        out = capsys.readouterr().out
        assert "=== Relevant NOTAMs ===" in out
        assert "AX0002/24" in out
        assert "OMAA" in out

    def test_unknown_report_exits(self, ofp_file):
        runner = ReportRunner.from_file(ofp_file)

        with pytest.raises(SystemExit):
            runner.run_predefined_report('nope')
