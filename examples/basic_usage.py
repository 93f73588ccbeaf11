"""
Basic usage example for serial-dedupe.

This example demonstrates:
1. Queueing videos tagged with their render dimensions
2. Rendering once per dimension through representative hooks
3. Handling a dimension change and a removal
"""

from serial_dedupe import DedupIndex, HookEvent, HookPayload, HookRegistry


def main() -> None:
    # 1. Wire a hook that "renders" whenever a group elects a representative
    rendered: dict[str, str] = {}
    hooks = HookRegistry()

    def render(payload: HookPayload) -> None:
        serial, video_id = payload.data["serial"], payload.data["id"]
        rendered[serial] = f"render of {video_id} at {serial}"
        print(f"  rendering {serial} via {video_id}")

    def invalidate(payload: HookPayload) -> None:
        rendered.pop(payload.data["serial"], None)
        print(f"  dropped render for {payload.data['serial']}")

    hooks.on(HookEvent.REPRESENTATIVE_ELECTED, render)
    hooks.on(HookEvent.GROUP_DISSOLVED, invalidate)

    with DedupIndex(hooks=hooks) as index:
        videos = [
            ("intro", "400x500"),
            ("teaser", "400x500"),
            ("trailer", "1920x1080"),
            ("outro", "400x500"),
        ]

        print("Adding videos...")
        for video_id, dims in videos:
            index.upsert(video_id, dims)
        stats = index.apply_pending()
        print(f"  {stats.items_added} videos, {stats.groups_created} renders")

        # 2. Every video reuses its group's render
        for video_id, dims in videos:
            role = "owner" if index.is_representative(video_id) else "shares"
            print(f"  {video_id:8} {role:6} {rendered[dims]}")

        # 3. The intro changes size, which hands its old group to the teaser
        print("\nResizing intro...")
        index.upsert("intro", "800x600")
        index.apply_pending()
        print(f"  400x500 owner: {index.representative_of('400x500')}")

        print("\nRemoving trailer...")
        index.remove("trailer")
        index.apply_pending()
        print(f"  1920x1080 group: {index.group_for('1920x1080')}")


if __name__ == "__main__":
    main()
