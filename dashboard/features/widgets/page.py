from __future__ import annotations

import html
import json

from .types import ACCEPTED_EXTENSIONS, DEFAULT_AGENT_CONFIG

_PAGE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Agent Dashboard</title>
<style>
  body { font-family: system-ui, sans-serif; margin: 0; background: #f3f4f6; color: #111; }
  main { max-width: 1100px; margin: 0 auto; padding: 24px; }
  .grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(420px, 1fr)); gap: 24px; }
  section { background: #fff; border: 2px solid #d1d5db; border-radius: 8px; padding: 20px; margin-bottom: 24px; }
  label { display: block; font-weight: 700; font-size: 14px; margin: 12px 0 4px; }
  input[type=text], textarea, select { width: 100%; box-sizing: border-box; padding: 6px; }
  button { margin-top: 16px; width: 100%; padding: 10px; font-weight: 700; cursor: pointer; }
  .result { margin-top: 12px; padding: 12px; border-radius: 6px; border: 2px solid; white-space: pre-wrap; }
  .ok { background: #dcfce7; border-color: #22c55e; }
  .fail { background: #fee2e2; border-color: #ef4444; }
  details pre { font-size: 12px; overflow: auto; max-height: 300px; }
</style>
</head>
<body>
<main>
  <section>
    <label for="user-id">User ID</label>
    <input id="user-id" type="text" value="__USER_ID__">
    <p>All operations will be performed for this user ID.</p>
  </section>
  <div class="grid">
    <div>
      <section id="upload">
        <h2>Upload Documents</h2>
        <form id="upload-form">
          <label>Collection Name (optional)</label>
          <input name="collection_name" type="text" placeholder="Default Collection">
          <label>Documents</label>
          <input name="files" type="file" multiple accept="__ACCEPT__">
          <p>Accepted file types: PDF, DOC, DOCX, TXT, MD</p>
          <button type="submit">UPLOAD DOCUMENTS</button>
        </form>
        <div class="out"></div>
      </section>
      <section id="collections">
        <h2>Document Collections</h2>
        <div class="out">Loading collections...</div>
      </section>
    </div>
    <div>
      <section id="config">
        <h2>Configure Agent</h2>
        <form id="config-form">
          <label>System Prompt</label>
          <textarea name="system_prompt" rows="4" required></textarea>
          <label>Voice</label>
          <select name="voice">
            <option value="alloy">Alloy</option><option value="echo">Echo</option>
            <option value="fable">Fable</option><option value="nova">Nova</option>
            <option value="shimmer">Shimmer</option>
          </select>
          <label>Model</label>
          <select name="model">
            <option value="gpt-4o-mini">GPT-4o Mini</option><option value="gpt-4o">GPT-4o</option>
          </select>
          <label>Agent Name</label>
          <input name="agent_name" type="text" placeholder="Assistant">
          <button type="submit">SAVE CONFIGURATION</button>
        </form>
        <div class="out"></div>
      </section>
      <section id="control">
        <h2>Agent Control</h2>
        <form id="start-form">
          <label>Collection</label>
          <select name="collection_name"><option value="">Default</option></select>
          <label>Phone Number (for outbound calls)</label>
          <input name="phone_number" type="text" placeholder="+1234567890">
          <label>Agent Type</label>
          <label><input type="radio" name="agent_type" value="voice" checked> Voice Agent</label>
          <label><input type="radio" name="agent_type" value="web"> Web Agent</label>
          <button type="submit">START AGENT</button>
        </form>
        <div id="running" hidden>
          <p><b>Agent is currently running</b></p>
          <button id="stop-button" type="button">STOP AGENT</button>
        </div>
        <button id="probe-button" type="button">TEST API (DEBUG)</button>
        <div class="out"></div>
      </section>
    </div>
  </div>
</main>
<script>
const DEFAULT_CONFIG = __DEFAULT_CONFIG__;
const currentUser = () => document.getElementById("user-id").value;
const base = () => "/api/dashboard/users/" + encodeURIComponent(currentUser());

function render(section, result) {
  const out = document.querySelector(section + " .out");
  out.className = "out result " + (result.success ? "ok" : "fail");
  out.textContent = result.message;
  if (result.error) {
    const details = document.createElement("details");
    const summary = document.createElement("summary");
    summary.textContent = result.error.title + ": " + result.error.headline;
    const pre = document.createElement("pre");
    pre.textContent = result.error.help.concat(["", result.error.full_text]).join("\\n");
    details.append(summary, pre);
    out.append(details);
  }
}

function failureText(response, body) {
  const detail = body && body.detail !== undefined ? body.detail : null;
  if (typeof detail === "string") return detail;
  if (detail !== null) return JSON.stringify(detail, null, 2);
  return response.status + " " + response.statusText;
}

async function call(method, path, body, json) {
  const init = { method: method };
  if (body !== undefined) {
    init.body = json ? JSON.stringify(body) : body;
    if (json) init.headers = { "Content-Type": "application/json" };
  }
  let response;
  try {
    response = await fetch(base() + path, init);
  } catch (err) {
    return { success: false, failed: true, message: "Dashboard server unreachable: " + err };
  }
  let payload = null;
  try { payload = await response.json(); } catch (err) { payload = null; }
  if (response.ok && payload !== null) return payload;
  return { success: false, failed: true, message: "Request rejected: " + failureText(response, payload) };
}

async function loadCollections() {
  const user = currentUser();
  const state = await call("GET", "/collections");
  if (user !== currentUser()) return;
  const out = document.querySelector("#collections .out");
  if (state.failed || state.error) { out.textContent = state.error || state.message; return; }
  if (!state.collections.length) { out.textContent = "No collections found."; return; }
  out.textContent = state.collections
    .map(c => c.name + "  " + c.path + (c.is_default ? "  [Default]" : ""))
    .join("\\n");
  out.style.whiteSpace = "pre-wrap";
}

async function loadControl() {
  const user = currentUser();
  const state = await call("GET", "/agent");
  if (user !== currentUser()) return;
  if (state.failed) { render("#control", state); return; }
  const select = document.querySelector("#start-form select[name=collection_name]");
  select.length = 1;
  for (const c of state.collections) select.add(new Option(c.name, c.name));
  setRunning(state.agent_running);
}

function setRunning(running) {
  document.getElementById("start-form").hidden = running;
  document.getElementById("running").hidden = !running;
}

document.getElementById("upload-form").addEventListener("submit", async (event) => {
  event.preventDefault();
  const result = await call("POST", "/documents", new FormData(event.target), false);
  render("#upload", result);
  if (result.success) { event.target.reset(); loadCollections(); }
});

document.getElementById("config-form").addEventListener("submit", async (event) => {
  event.preventDefault();
  const body = Object.fromEntries(new FormData(event.target));
  render("#config", await call("POST", "/config", body, true));
});

document.getElementById("start-form").addEventListener("submit", async (event) => {
  event.preventDefault();
  const body = Object.fromEntries(new FormData(event.target));
  const result = await call("POST", "/agent/start", body, true);
  render("#control", result);
  if (result.success) setRunning(true);
});

document.getElementById("stop-button").addEventListener("click", async () => {
  const result = await call("POST", "/agent/stop");
  render("#control", result);
  if (result.success) setRunning(false);
});

document.getElementById("probe-button").addEventListener("click", async () => {
  render("#control", await call("POST", "/agent/probe"));
});

function refresh() { loadCollections(); loadControl(); }

const form = document.getElementById("config-form");
for (const [key, value] of Object.entries(DEFAULT_CONFIG)) form.elements[key].value = value;
document.getElementById("user-id").addEventListener("change", refresh);
refresh();
</script>
</body>
</html>
"""


def render_dashboard_page(default_user_id: str) -> str:
    return (
        _PAGE.replace("__USER_ID__", html.escape(default_user_id, quote=True))
        .replace("__ACCEPT__", ",".join(ACCEPTED_EXTENSIONS))
        .replace("__DEFAULT_CONFIG__", json.dumps(DEFAULT_AGENT_CONFIG.model_dump()).replace("</", "<\\/"))
    )
