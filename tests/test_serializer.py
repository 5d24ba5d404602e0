"""
CSV 序列化测试
"""

import unittest

from frame_profile_tool.errors import SerializationError
from frame_profile_tool.models import (
    CPUFrameData,
    FrameData,
    HierarchyFrameData,
    HierarchyItemFrameData,
    MemoryFrameData,
    RenderingFrameData,
)
from frame_profile_tool.serializer import (
    CPU_SCHEMA,
    HIERARCHY_ITEM_SCHEMA,
    HIERARCHY_SCHEMA,
    MEMORY_SCHEMA,
    RENDERING_SCHEMA,
    TableSchema,
    cpu_rows,
    format_value,
    hierarchy_item_rows,
    hierarchy_rows,
    serialize,
    to_dataframe,
)


def make_item(name, self_percent='12.3%'):
    return HierarchyItemFrameData(
        itemName=name,
        itemPath=f"PlayerLoop/{name}",
        columnName=name,
        columnObjectName='',
        columnCalls=2,
        columnGcMemory=0.0,
        columnSelfTime=1.5,
        columnSelfPercent=self_percent,
        columnTotalTime=3.0,
        columnTotalPercent='18.75%',
    )


def make_frame_data(frame, frame_index=None, items=()):
    return FrameData(
        frame=frame,
        cpuFrameData=CPUFrameData(scripts=12.5, rendering=3000000.0),
        memoryFrameData=MemoryFrameData(totalAllocated=1048576),
        renderingFrameData=RenderingFrameData(batches=42),
        hierarchyFrameData=HierarchyFrameData(
            frameFps=60.0,
            frameTimeMs=16.666,
            frameGpuTimeMs=0.0,
            frameIndex=frame if frame_index is None else frame_index,
            items=tuple(items),
        ),
    )


class TestFormatValue(unittest.TestCase):
    """测试字段值格式化"""

    def test_integral_floats_have_no_fraction(self):
        self.assertEqual(format_value(0.0), '0')
        self.assertEqual(format_value(16.0), '16')
        self.assertEqual(format_value(-2.0), '-2')

    def test_fractional_floats(self):
        self.assertEqual(format_value(12.5), '12.5')
        self.assertEqual(format_value(16.666), '16.666')
        self.assertEqual(format_value(0.1), '0.1')

    def test_ints_and_strings(self):
        self.assertEqual(format_value(1048576), '1048576')
        self.assertEqual(format_value('12.3%'), '12.3%')
        self.assertEqual(format_value(''), '')

    def test_unsupported_types(self):
        with self.assertRaises(SerializationError):
            format_value(None)
        with self.assertRaises(SerializationError):
            format_value(True)
        with self.assertRaises(SerializationError):
            format_value([1, 2])


class TestSerialize(unittest.TestCase):
    """测试 serialize"""

    def test_headers(self):
        self.assertEqual(
            CPU_SCHEMA.header,
            'frame,rendering,scripts,physics,animation,garbageCollector,VSync,globalIllumination,ui,others',
        )
        self.assertEqual(
            MEMORY_SCHEMA.header,
            'frame,totalAllocated,textureMemory,meshMemory,materialCount,objectCount,'
            'totalGCAllocated,globalIllumination,gcAllocated',
        )
        self.assertEqual(RENDERING_SCHEMA.header, 'frame,batches,setPassCall,triangles,vertices')
        self.assertEqual(HIERARCHY_SCHEMA.header, 'frame,frameIndex,frameFps,frameTimeMs,frameGpuTimeMs')
        self.assertEqual(
            HIERARCHY_ITEM_SCHEMA.header,
            'frame,frameIndex,itemName,itemPath,columnName,columnObjectName,columnCalls,'
            'columnGcMemory,columnSelfTime,columnSelfPercent,columnTotalTime,columnTotalPercent',
        )

    def test_zero_rows_is_header_only(self):
        for schema in (CPU_SCHEMA, MEMORY_SCHEMA, RENDERING_SCHEMA, HIERARCHY_SCHEMA, HIERARCHY_ITEM_SCHEMA):
            self.assertEqual(serialize([], schema), schema.header + '\n')

    def test_every_line_newline_terminated(self):
        text = serialize(cpu_rows([make_frame_data(5), make_frame_data(6)]), CPU_SCHEMA)
        self.assertTrue(text.endswith('\n'))
        self.assertNotIn('\r', text)
        self.assertEqual(len(text.split('\n')), 4)

    def test_cpu_row(self):
        text = serialize(cpu_rows([make_frame_data(5)]), CPU_SCHEMA)
        self.assertEqual(text.splitlines()[1], '5,3000000,12.5,0,0,0,0,0,0,0')

    def test_hierarchy_row(self):
        text = serialize(hierarchy_rows([make_frame_data(5, frame_index=9)]), HIERARCHY_SCHEMA)
        self.assertEqual(text.splitlines()[1], '5,9,60,16.666,0')

    def test_hierarchy_item_rows(self):
        frame_data = make_frame_data(5, frame_index=9, items=[make_item('Update'), make_item('Render', '40.0%')])
        text = serialize(hierarchy_item_rows([frame_data]), HIERARCHY_ITEM_SCHEMA)
        self.assertEqual(text.splitlines()[1:], [
            '5,9,Update,PlayerLoop/Update,Update,,2,0,1.5,12.3%,3,18.75%',
            '5,9,Render,PlayerLoop/Render,Render,,2,0,1.5,40.0%,3,18.75%',
        ])

    def test_values_are_not_quoted(self):
        schema = TableSchema('names.csv', ('frame', 'name'))
        text = serialize([{'frame': 1, 'name': 'Camera.Render, Opaque'}], schema)
        self.assertEqual(text, 'frame,name\n1,Camera.Render, Opaque\n')

    def test_missing_field(self):
        schema = TableSchema('names.csv', ('frame', 'name'))
        with self.assertRaises(SerializationError):
            serialize([{'frame': 1}], schema)

    def test_extra_field(self):
        schema = TableSchema('names.csv', ('frame', 'name'))
        with self.assertRaises(SerializationError):
            serialize([{'frame': 1, 'name': 'Update', 'depth': 2}], schema)

    def test_serialize_is_pure(self):
        rows = cpu_rows([make_frame_data(5)])
        self.assertEqual(serialize(rows, CPU_SCHEMA), serialize(rows, CPU_SCHEMA))


class TestToDataFrame(unittest.TestCase):
    """测试 to_dataframe"""

    def test_columns_in_schema_order(self):
        df = to_dataframe(cpu_rows([make_frame_data(5), make_frame_data(6)]), CPU_SCHEMA)
        self.assertEqual(list(df.columns), list(CPU_SCHEMA.fields))
        self.assertEqual(list(df['frame']), [5, 6])
        self.assertEqual(df['scripts'].iloc[0], 12.5)

    def test_empty_rows(self):
        df = to_dataframe([], RENDERING_SCHEMA)
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), list(RENDERING_SCHEMA.fields))

    def test_missing_field(self):
        with self.assertRaises(SerializationError):
            to_dataframe([{'frame': 1}], RENDERING_SCHEMA)

    def test_extra_field(self):
        row = {field_name: 0 for field_name in RENDERING_SCHEMA.fields}
        row['drawCalls'] = 3
        with self.assertRaises(SerializationError):
            to_dataframe([row], RENDERING_SCHEMA)


if __name__ == '__main__':
    unittest.main()
