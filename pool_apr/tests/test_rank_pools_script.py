"""
rank_pools 스크립트 테스트

JSON 풀 레코드 → 랭킹 테이블(CSV/표준출력)을 테스트합니다.
"""

import json

import pandas as pd
import pytest

from ..scripts.rank_pools import build_table, load_pool_records, main


def pool_record(address, fee_tier, volume="1000000"):
    return {
        "id": address,
        "feeTier": str(fee_tier),
        "tick": "0",
        "liquidity": "0",
        "volumeUSD": volume,
        "volumeUSDWeek": "7000000",
        "tvlUSD": "10000000",
        "token0": {"id": "0xa", "symbol": "AAA", "decimals": "18", "tokenDayData": [{"priceUSD": "1"}]},
        "token1": {"id": "0xb", "symbol": "BBB", "decimals": "18", "tokenDayData": [{"priceUSD": "1"}]},
        "poolDayData": [{"volumeUSD": volume, "high": "1.01", "low": "0.99"}] * 14,
    }


@pytest.fixture
def pools_file(tmp_path):
    path = tmp_path / "pools.json"
    records = [
        pool_record("0x500", 500),
        pool_record("0x3000", 3000),
        pool_record("0xlow", 10000, volume="10"),
    ]
    path.write_text(json.dumps({"data": {"pools": records}}))
    return path


class TestLoadPoolRecords:
    """load_pool_records 테스트"""

    def test_formats(self, tmp_path):
        records = [pool_record("0x1", 500)]
        for payload in (records, {"pools": records}, {"data": {"pools": records}}):
            path = tmp_path / "p.json"
            path.write_text(json.dumps(payload))
            assert load_pool_records(str(path)) == records

    def test_invalid_raises(self, tmp_path):
        path = tmp_path / "p.json"
        path.write_text(json.dumps({"pools": "nope"}))
        with pytest.raises(ValueError):
            load_pool_records(str(path))


class TestMain:
    """main() 테스트"""

    def test_csv_output(self, pools_file, tmp_path):
        out = tmp_path / "ranked.csv"
        assert main(["--pools", str(pools_file), "--csv", str(out)]) == 0

        df = pd.read_csv(out)
        assert list(df["rank"]) == [1, 2]
        assert list(df["address"]) == ["0x3000", "0x500"]
        assert list(df["usable_tick"]) == [0, 0]

    def test_denylist_and_top(self, pools_file, tmp_path):
        denylist = tmp_path / "denylist.yaml"
        denylist.write_text("ethereum:\n  - \"0x3000\"\n")
        out = tmp_path / "ranked.csv"

        code = main([
            "--pools", str(pools_file),
            "--denylist", str(denylist),
            "--top", "1",
            "--csv", str(out),
        ])
        assert code == 0
        assert list(pd.read_csv(out)["address"]) == ["0x500"]

    def test_stdout(self, pools_file, capsys):
        assert main(["--pools", str(pools_file), "--network", "polygon"]) == 0
        captured = capsys.readouterr().out
        assert "POLYGON" in captured
        assert "AAA/BBB" in captured

    def test_missing_file(self, tmp_path, capsys):
        assert main(["--pools", str(tmp_path / "missing.json")]) == 1
        assert "❌" in capsys.readouterr().out


class TestBuildTable:
    """build_table 테스트"""

    def test_empty(self):
        assert build_table([]).empty


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
