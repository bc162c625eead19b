import logging
from functools import partial

import gradio as gr

from jq_web_tool.config import load_config
from jq_web_tool.encoding import MODE_LABELS
from jq_web_tool.handlers import (
    apply_template,
    export_output_handler,
    initialize_engine,
    load_sample,
    load_uploaded_file,
    reformat_handler,
    run_query_handler,
    run_quick_action,
)
from jq_web_tool.samples import DEFAULT_SAMPLE, QUERY_TEMPLATES, QUICK_ACTIONS, SAMPLES, sample_json

config = load_config()

# --- UI Definition ---
with gr.Blocks(title="jq Web Tool") as demo:
    gr.Markdown("# jq Web Tool")
    gr.Markdown("No jq install needed. Query and reshape JSON right in the browser.")

    # State
    engine_state = gr.State()
    result_state = gr.State()

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### JSON Input")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            with gr.Row():
                sample_buttons = {key: gr.Button(sample.name, size="sm") for key, sample in SAMPLES.items()}
            json_input = gr.Textbox(
                value=sample_json(DEFAULT_SAMPLE),
                lines=15,
                max_lines=40,
                label="JSON",
                placeholder="Paste JSON here or upload a file",
            )

        # Middle Panel: Query
        with gr.Column(scale=1):
            gr.Markdown("### Choose an operation")
            with gr.Accordion("⚡ Quick actions", open=True):
                quick_buttons = [(action, gr.Button(action.button_label, size="sm")) for action in QUICK_ACTIONS]
            with gr.Accordion("📚 Query templates", open=True):
                template_buttons = [
                    (template, gr.Button(f"{template.name}  `{template.query}`", size="sm"))
                    for template in QUERY_TEMPLATES
                ]

            query_input = gr.Textbox(value=".", label="Custom query", placeholder="jq query, e.g. .name or .cities[]")
            with gr.Row():
                raw_option = gr.Checkbox(label="Raw (-r)", value=False)
                slurp_option = gr.Checkbox(label="Slurp (-s)", value=False)
            output_mode = gr.Radio(choices=MODE_LABELS, value=config.default_mode.label, label="Output Format")
            engine_status = gr.Textbox(label="Engine", value="Loading jq...", interactive=False)
            execute_btn = gr.Button("Loading...", variant="primary", interactive=False)

        # Right Panel: Output
        with gr.Column(scale=1):
            gr.Markdown("### Result")
            error_box = gr.Textbox(label="Error", interactive=False)
            output_text = gr.Textbox(
                label="Output",
                lines=15,
                max_lines=40,
                interactive=False,
                placeholder="Results appear here",
                show_copy_button=True,
            )
            table_preview = gr.Dataframe(label="Table Preview", interactive=False)
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="output")
            export_btn = gr.Button("Export Result")
            download_output = gr.File(label="Download Result")
            export_status = gr.Textbox(label="Status", interactive=False)

    with gr.Accordion("💡 Tips", open=False):
        gr.Markdown(
            "1. **Pick a sample** from the buttons above the input.\n"
            "2. **Try a quick action** to run a common operation in one click.\n"
            "3. **Use a template** to start from a basic query pattern.\n"
            "4. **Write your own query** once you are comfortable."
        )

    query_inputs = [json_input, output_mode, raw_option, slurp_option]
    query_outputs = [output_text, error_box, result_state, table_preview]

    demo.load(
        fn=partial(initialize_engine, config),
        outputs=[engine_state, engine_status, execute_btn],
    )

    file_input.upload(
        fn=load_uploaded_file,
        inputs=[file_input],
        outputs=[json_input, error_box],
    )

    for key, button in sample_buttons.items():
        button.click(fn=partial(load_sample, key), outputs=[json_input])

    for template, button in template_buttons:
        button.click(fn=partial(apply_template, template.query), outputs=[query_input])

    for action, button in quick_buttons:
        button.click(
            fn=partial(run_quick_action, action.query),
            inputs=[engine_state] + query_inputs,
            outputs=[query_input] + query_outputs,
        )

    execute_btn.click(
        fn=run_query_handler,
        inputs=[engine_state, json_input, query_input, output_mode, raw_option, slurp_option],
        outputs=query_outputs,
    )

    query_input.submit(
        fn=run_query_handler,
        inputs=[engine_state, json_input, query_input, output_mode, raw_option, slurp_option],
        outputs=query_outputs,
    )

    output_mode.change(
        fn=reformat_handler,
        inputs=[engine_state, result_state, output_mode],
        outputs=[output_text, error_box, table_preview],
    )

    export_btn.click(
        fn=export_output_handler,
        inputs=[engine_state, result_state, output_mode, output_filename],
        outputs=[download_output, export_status],
    )

if __name__ == "__main__":
    logging.basicConfig(level=config.log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    demo.launch(server_name=config.server_name, server_port=config.server_port)
