"""
测试用的示例采样数据
"""

from frame_profile_tool.source import FrameSample, HierarchyItem, HierarchySample, InMemoryProfileSource


def make_leaf(name, self_time=1.0, calls=1, gc_memory=0.0, **columns):
    columns.update({'calls': calls, 'gcMemory': gc_memory, 'selfTime': self_time, 'totalTime': self_time})
    return HierarchyItem(name=name, columns=columns)


def make_branch(name, children, self_time=0.5):
    total_time = self_time + sum(child.columns['totalTime'] for child in children)
    return HierarchyItem(
        name=name,
        columns={'calls': 1, 'gcMemory': 0.0, 'selfTime': self_time, 'totalTime': total_time},
        children=list(children),
    )


def make_two_branch_tree():
    """根节点下两个分支节点，每个分支节点两个叶子节点"""
    return HierarchyItem(name='ROOT', children=[
        make_branch('PlayerLoop', [make_leaf('Update', 2.0), make_leaf('Render', 4.0, calls=3)]),
        make_branch('EditorLoop', [make_leaf('Repaint', 1.5), make_leaf('Inspector', 0.25)]),
    ])


def make_frame_sample(frame, root=None, statistics=None, frame_time_ms=16.0):
    if statistics is None:
        statistics = {
            'CPU': {'Scripts': 12.5, 'Rendering': 3000000.0},
            'Memory': {'Total Allocated': 1048576.9, 'Object Count': 1024.0},
            'Rendering': {'Batches': 42.0, 'SetPass Calls': 7.0},
        }
    return FrameSample(
        statistics=statistics,
        hierarchy=HierarchySample(
            frame_index=frame,
            frame_fps=60.0,
            frame_time_ms=frame_time_ms,
            frame_gpu_time_ms=8.25,
            root=root if root is not None else make_two_branch_tree(),
        ),
    )


def make_source(first=5, last=8, **kwargs):
    frames = {frame: make_frame_sample(frame, **kwargs) for frame in range(first, last)}
    return InMemoryProfileSource(frames, first_frame_index=first, last_frame_index=last)


def make_profile_json(first=5, last=8):
    """与 make_source 对应的 JSON 导出内容"""
    def item_to_dict(item):
        return {
            'name': item.name,
            'columns': dict(item.columns),
            'children': [item_to_dict(child) for child in item.children],
        }

    frames = []
    for frame in range(first, last):
        sample = make_frame_sample(frame)
        frames.append({
            'frame': frame,
            'statistics': sample.statistics,
            'hierarchy': {
                'frameIndex': sample.hierarchy.frame_index,
                'frameFps': sample.hierarchy.frame_fps,
                'frameTimeMs': sample.hierarchy.frame_time_ms,
                'frameGpuTimeMs': sample.hierarchy.frame_gpu_time_ms,
                'root': item_to_dict(sample.hierarchy.root),
            },
        })
    return {'firstFrameIndex': first, 'lastFrameIndex': last, 'frames': frames}
