"""Schema 和区域配置导出单元测试"""

from unittest.mock import patch

import pytest

from workload_exporter.export import FileWriteError
from workload_exporter.export.cluster import ClusterClient
from workload_exporter.export.dumpers import dump_schema, dump_zone_configurations
from workload_exporter.export.staging import StagingArea


@pytest.fixture
def staging(tmp_path):
    """创建暂存区"""
    return StagingArea.create(parent=tmp_path)


@pytest.fixture
def client(fake_conn):
    """创建集群客户端"""
    return ClusterClient(fake_conn)


class TestDumpSchema:
    """测试 Schema 导出"""

    @pytest.mark.asyncio
    async def test_writes_joined_statements(self, client, staging, fake_cluster):
        """测试 CREATE 语句以换行连接"""
        path = await dump_schema(client, staging, "movr")

        assert path.name == "movr.schema.txt"
        assert path.read_text(encoding="utf-8") == "\n".join(
            fake_cluster.create_statements["movr"]
        )

    @pytest.mark.asyncio
    async def test_empty_database(self, client, staging):
        """测试没有表的数据库生成空文件"""
        path = await dump_schema(client, staging, "defaultdb")

        assert path.exists()
        assert path.read_text(encoding="utf-8") == ""

    @pytest.mark.asyncio
    async def test_write_failure(self, client, staging):
        """测试写文件失败"""
        with patch(
            "workload_exporter.export.dumpers.open",
            side_effect=OSError("disk full"),
            create=True,
        ):
            with pytest.raises(FileWriteError) as exc_info:
                await dump_schema(client, staging, "movr")

        assert exc_info.value.stage == "schemas"


class TestDumpZoneConfigurations:
    """测试区域配置导出"""

    @pytest.mark.asyncio
    async def test_writes_configs(self, client, staging):
        """测试写入非空配置"""
        path = await dump_zone_configurations(client, staging)

        lines = path.read_text(encoding="utf-8").split("\n")
        assert path.name == "zone_configurations.txt"
        assert lines == [
            "ALTER RANGE default CONFIGURE ZONE USING num_replicas = 3",
            "ALTER DATABASE system CONFIGURE ZONE USING num_replicas = 5",
        ]

    @pytest.mark.asyncio
    async def test_no_configs(self, client, staging, fake_cluster):
        """测试没有区域配置时生成空文件"""
        fake_cluster.zone_configs = []

        path = await dump_zone_configurations(client, staging)

        assert path.read_text(encoding="utf-8") == ""
