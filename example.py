"""Example usage of the xmldifference comparison engine."""

import json
from xmldifference import (
    DifferenceEngine,
    EngineConfig,
    CollectingListener,
    LoggingListener,
    build_document,
)

# Control document (what we expect)
control_xml = """<?xml version="1.0"?>
<!DOCTYPE cartoons SYSTEM "cartoons.dtd">
<cartoons>
    <toon name="bugs" studio="wb"><name>bugs bunny</name></toon>
    <!--meep meep-->
    <toon name="roadrunner" studio="wb"><name>roadrunner</name></toon>
</cartoons>
"""

# Same content, children and attributes reordered
reordered_xml = """<?xml version="1.0"?>
<!DOCTYPE cartoons SYSTEM "cartoons.dtd">
<cartoons>
    <!--meep meep-->
    <toon studio="wb" name="bugs"><name>bugs bunny</name></toon>
    <toon name="roadrunner" studio="wb"><name>roadrunner</name></toon>
</cartoons>
"""

# A different text value
changed_xml = """<?xml version="1.0"?>
<!DOCTYPE cartoons SYSTEM "cartoons.dtd">
<cartoons>
    <toon name="bugs" studio="wb"><name>daffy duck</name></toon>
    <!--meep meep-->
    <toon name="roadrunner" studio="wb"><name>roadrunner</name></toon>
</cartoons>
"""


def main():
    print("=" * 60)
    print("xmldifference Comparison Engine - Example")
    print("=" * 60)

    # Whitespace-only text between elements is dropped when ignoring whitespace
    engine = DifferenceEngine(EngineConfig(ignore_whitespace=True))

    result = engine.diff(control_xml, reordered_xml)

    # Check result type
    if hasattr(result, 'identical'):
        # Success - DiffReport
        print(f"\nIdentical: {result.identical}")
        print(f"Similar: {result.similar}")
        print(f"\nExecution:")
        print(f"  Duration: {result.execution.duration_ms}ms")
        print(f"  Engine Version: {result.execution.engine_version}")

        print(f"\nSummary:")
        print(f"  Nodes Compared: {result.summary.nodes_compared}")
        print(f"  Differences: {result.summary.differences_found}")
        print(f"  Recoverable: {result.summary.recoverable_count}")
        print(f"  Skipped: {result.summary.skipped_count}")

        if result.differences:
            print(f"\nDifferences:")
            for entry in result.differences:
                print(f"  - [{entry.difference.name}] {entry.control_path}")
                print(f"    {entry.message}")

        print("\n" + "-" * 60)
        print("Full JSON Report:")
        print(json.dumps(result.to_dict(), indent=2))

    else:
        # Error - ErrorResponse
        print(f"\nError: {result.error['code']}")
        print(f"Message: {result.error['message']}")
        print(f"Details: {result.error.get('details', {})}")


def example_with_listener():
    """Example that drives the engine directly with a listener."""
    print("\n" + "=" * 60)
    print("Example with Listener")
    print("=" * 60)

    config = EngineConfig(ignore_whitespace=True)
    control = build_document(control_xml, ignore_whitespace=True)
    test = build_document(changed_xml, ignore_whitespace=True)

    collector = CollectingListener()
    DifferenceEngine(config).compare(control, test, LoggingListener(delegate=collector))

    print(f"\nIdentical: {collector.identical}")
    print(f"Similar: {collector.similar}")
    for entry in collector.differences:
        print(f"  - [{entry.difference.name}] {entry.message}")


if __name__ == "__main__":
    main()
    example_with_listener()
