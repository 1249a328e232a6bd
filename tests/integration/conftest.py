# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Shared fixtures for integration tests.

Provides a representative check project on disk mixing JavaScript and
TypeScript files, CommonJS and ES module syntax, and a config file.
"""

from pathlib import Path

import pytest


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Create a representative check project for integration testing.

    Creates a project with:
    - A TypeScript entrypoint importing TypeScript and JavaScript helpers
    - A JavaScript entrypoint using require() and module.require()
    - Shared helpers imported from several files, plus a cycle
    - Re-exports, side-effect imports and template literal specifiers
    - A .check_deps.yml allowing one package

    Returns:
        Path to the project root directory
    """
    project_root = tmp_path / "sample_project"
    checks_dir = project_root / "checks"
    lib_dir = project_root / "lib"
    checks_dir.mkdir(parents=True)
    lib_dir.mkdir()

    (project_root / ".check_deps.yml").write_text(
        """allowed_packages:
  - "@playwright/test"
"""
    )

    (checks_dir / "login.check.ts").write_text(
        """import { test, expect } from '@playwright/test'
import * as fs from 'fs'
import { openPage } from '../lib/browser'
import { credentials } from '../lib/credentials'
import type { Options } from './types'
export { retry } from '../lib/retry'

test('login', async ({ page }) => {
  await openPage(page, credentials)
  expect(fs.existsSync('/tmp')).toBe(true)
})
"""
    )

    (checks_dir / "types.ts").write_text(
        """export interface Options {
  timeout: number
}
"""
    )

    (checks_dir / "api.check.js").write_text(
        """const assert = require('assert')
const { retry } = require(`../lib/retry`)
const credentials = module.require('../lib/credentials.js')
const name = 'dynamic'
const plugin = require(name)

module.exports = async function run () {
  await retry(() => assert.ok(credentials))
}
"""
    )

    # browser.ts has no .ts sibling for 'helpers', so it falls back to helpers.js
    (lib_dir / "browser.ts").write_text(
        """import { wait } from './helpers'
import './polyfills'

export async function openPage (page: any, creds: unknown): Promise<void> {
  await wait(100)
}
"""
    )

    (lib_dir / "polyfills.ts").write_text("import './browser'\n")

    (lib_dir / "helpers.js").write_text(
        """const { setTimeout } = require('timers')

exports.wait = (ms) => new Promise((resolve) => setTimeout(resolve, ms))
"""
    )

    (lib_dir / "credentials.js").write_text(
        """module.exports = { user: 'check', password: process.env.PASSWORD }
"""
    )

    (lib_dir / "retry.js").write_text(
        """const { wait } = require('./helpers')

exports.retry = async function retry (fn, attempts = 3) {
  for (let i = 0; i < attempts; i++) {
    try { return await fn() } catch (e) { await wait(10) }
  }
}
"""
    )

    return project_root
