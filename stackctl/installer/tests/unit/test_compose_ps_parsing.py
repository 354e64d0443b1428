#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import io
import json
import unittest

from stackctl.installer.actions.rollout import ContainerState, DockerComposeRuntime, parse_ps_json


class ScriptedRunner:
    def __init__(self, result=(0, [])):
        self.result = result
        self.calls = []

    def __call__(self, command, stderr=True, cwd=None, **kwargs):
        self.calls.append((list(command), stderr, cwd))
        return self.result


class TestParsePsJson(unittest.TestCase):
    def test_json_array(self):
        output = [json.dumps([{"ID": "a1", "Service": "web"}, {"ID": "a2", "Service": "web"}, "junk"])]
        self.assertEqual([e["ID"] for e in parse_ps_json(output)], ["a1", "a2"])

    def test_ndjson(self):
        output = [
            json.dumps({"ID": "b1", "Service": "worker", "State": "running"}),
            "WARN[0000] The \"FOO\" variable is not set",
            json.dumps({"ID": "b2", "Service": "worker", "State": "exited"}),
        ]
        self.assertEqual([e["ID"] for e in parse_ps_json(output)], ["b1", "b2"])

    def test_garbage_and_empty(self):
        self.assertEqual(parse_ps_json([]), [])
        self.assertEqual(parse_ps_json(["", "  "]), [])
        self.assertEqual(parse_ps_json(["{not json"]), [])


class TestContainerState(unittest.TestCase):
    def test_health_takes_precedence(self):
        self.assertTrue(ContainerState("x", "postgres", "running", "healthy").is_healthy)
        self.assertFalse(ContainerState("x", "postgres", "running", "starting").is_healthy)
        self.assertFalse(ContainerState("x", "postgres", "running", "unhealthy").is_healthy)

    def test_running_without_healthcheck(self):
        self.assertTrue(ContainerState("x", "caddy", "running").is_healthy)
        self.assertTrue(ContainerState("x", "caddy", "Running").is_healthy)
        self.assertFalse(ContainerState("x", "caddy", "restarting").is_healthy)


class TestDockerComposeRuntime(unittest.TestCase):
    def _runtime(self, runner, profiles=("data", "app")):
        return DockerComposeRuntime(
            workdir="/srv/stack",
            project_name="digi",
            compose_file="/srv/stack/docker-compose.yml",
            env_file="/srv/stack/.env",
            profiles=profiles,
            runner=runner,
        )

    def test_compose_command(self):
        runtime = self._runtime(ScriptedRunner())
        self.assertEqual(
            runtime.compose_command("up", "-d"),
            [
                "docker",
                "compose",
                "-p",
                "digi",
                "-f",
                "/srv/stack/docker-compose.yml",
                "--env-file",
                "/srv/stack/.env",
                "--project-directory",
                "/srv/stack",
                "--profile",
                "data",
                "--profile",
                "app",
                "up",
                "-d",
            ],
        )

    def test_up_with_services(self):
        runner = ScriptedRunner()
        ok, _ = self._runtime(runner, profiles=()).up(["postgres", "redis"])
        self.assertTrue(ok)
        command, _, cwd = runner.calls[0]
        self.assertEqual(command[-4:], ["up", "-d", "postgres", "redis"])
        self.assertEqual(cwd, "/srv/stack")

    def test_validate_failure(self):
        runner = ScriptedRunner((1, ["service \"web\" refers to undefined network"]))
        ok, out = self._runtime(runner).validate()
        self.assertFalse(ok)
        self.assertEqual(out, ["service \"web\" refers to undefined network"])
        self.assertEqual(runner.calls[0][0][-2:], ["config", "--quiet"])

    def test_service_states(self):
        output = [
            json.dumps({"ID": "c1", "Service": "web", "State": "running", "Health": "healthy"}),
            json.dumps({"ID": "c2", "Service": "web", "State": "running", "Health": ""}),
        ]
        runner = ScriptedRunner((0, output))
        states = self._runtime(runner).service_states("web")
        self.assertEqual(
            states,
            [ContainerState("c1", "web", "running", "healthy"), ContainerState("c2", "web", "running", "")],
        )
        command, stderr, _ = runner.calls[0]
        self.assertEqual(command[-5:], ["ps", "--all", "--format", "json", "web"])
        self.assertFalse(stderr)

    def test_service_states_on_error(self):
        self.assertEqual(self._runtime(ScriptedRunner((1, ["boom"]))).service_states("web"), [])

    def test_container_ids(self):
        runner = ScriptedRunner((0, ["abc123", "", "def456 "]))
        self.assertEqual(self._runtime(runner).container_ids("worker"), ["abc123", "def456"])

    def test_restart_container(self):
        runner = ScriptedRunner()
        self.assertTrue(self._runtime(runner).restart_container("abc123"))
        self.assertEqual(runner.calls[0][0], ["docker", "restart", "abc123"])

    def test_exec_to_file_streams_stdout(self):
        streamed = []

        def stream_runner(command, output_file, cwd=None):
            streamed.append((command, cwd))
            output_file.write(b"row\x0bwith-vtab\t\xff\n")
            return 0, []

        runtime = DockerComposeRuntime(
            workdir="/srv/stack",
            project_name="digi",
            compose_file="/srv/stack/docker-compose.yml",
            env_file="/srv/stack/.env",
            runner=ScriptedRunner(),
            stream_runner=stream_runner,
        )
        output = io.BytesIO()
        self.assertEqual(runtime.exec_to_file("postgres", ["pg_dump", "-U", "app"], output), (0, []))
        self.assertEqual(output.getvalue(), b"row\x0bwith-vtab\t\xff\n")
        command, cwd = streamed[0]
        self.assertEqual(command[-6:], ["exec", "-T", "postgres", "pg_dump", "-U", "app"])
        self.assertEqual(cwd, "/srv/stack")


if __name__ == "__main__":
    unittest.main()
