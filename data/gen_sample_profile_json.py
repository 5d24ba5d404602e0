"""
生成用于演示和手工测试的帧性能数据导出文件
"""

import argparse
import gzip
import json
import os
import random


CPU_STATISTICS = ['Rendering', 'Scripts', 'Physics', 'Animation', 'GarbageCollector',
                  'VSync', 'Global Illumination', 'UI', 'Others']
MEMORY_STATISTICS = ['Total Allocated', 'Texture Memory', 'Mesh Memory', 'Material Count',
                     'Object Count', 'Total GC Allocated', 'Global Illumination', 'GC Allocated']
RENDERING_STATISTICS = ['Batches', 'SetPass Calls', 'Triangles', 'Vertices']

# 模拟的调用层级: 名称 -> 子节点
CALL_TREE = {
    'PlayerLoop': {
        'Update.ScriptRunBehaviourUpdate': {
            'BehaviourUpdate': {},
        },
        'PostLateUpdate.FinishFrameRendering': {
            'Camera.Render': {},
            'Canvas.SendWillRenderCanvases': {},
        },
    },
    'EditorLoop': {},
}


def make_item(name, children, rng, budget_ms):
    self_time = round(rng.uniform(0.0, budget_ms / 4), 3)
    child_items = [make_item(child_name, grand_children, rng, budget_ms / 2)
                   for child_name, grand_children in children.items()]
    total_time = self_time + sum(child['columns']['totalTime'] for child in child_items)
    return {
        'name': name,
        'columns': {
            'objectName': '',
            'calls': rng.randint(1, 4),
            'gcMemory': rng.choice([0, 0, 0, 32, 128]),
            'selfTime': self_time,
            'totalTime': round(total_time, 3),
        },
        'children': child_items,
    }


def make_frame(frame, rng):
    frame_time_ms = round(rng.uniform(14.0, 20.0), 3)
    statistics = {
        # CPU 计数器为引擎原始计时单位 (纳秒)
        'CPU': {name: float(rng.randint(0, 4_000_000)) for name in CPU_STATISTICS},
        'Memory': {name: float(rng.randint(0, 512 * 1024 * 1024)) for name in MEMORY_STATISTICS},
        'Rendering': {name: float(rng.randint(0, 20000)) for name in RENDERING_STATISTICS},
    }
    root = {
        'name': 'ROOT',
        'columns': {},
        'children': [make_item(name, children, rng, frame_time_ms)
                     for name, children in CALL_TREE.items()],
    }
    return {
        'frame': frame,
        'statistics': statistics,
        'hierarchy': {
            'frameIndex': frame,
            'frameFps': round(1000.0 / frame_time_ms, 2),
            'frameTimeMs': frame_time_ms,
            'frameGpuTimeMs': round(frame_time_ms * rng.uniform(0.3, 0.8), 3),
            'root': root,
        },
    }


def main():
    parser = argparse.ArgumentParser(description="生成示例帧性能数据")
    parser.add_argument("--first", type=int, default=0, help="第一帧索引")
    parser.add_argument("--frames", type=int, default=300, help="帧数")
    parser.add_argument("--seed", type=int, default=42, help="随机种子")
    parser.add_argument("--output", default="./sample_profile.json.gz",
                        help="输出文件，以 .gz 结尾时压缩")
    args = parser.parse_args()

    rng = random.Random(args.seed)
    data = {
        'firstFrameIndex': args.first,
        'lastFrameIndex': args.first + args.frames,
        'frames': [make_frame(frame, rng) for frame in range(args.first, args.first + args.frames)],
    }

    open_func = gzip.open if args.output.endswith('.gz') else open
    with open_func(args.output, 'wt', encoding='utf-8') as f:
        json.dump(data, f)
    print(f"示例数据已保存: {os.path.abspath(args.output)} ({args.frames} 帧)")


if __name__ == "__main__":
    main()
