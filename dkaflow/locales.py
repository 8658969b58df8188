"""
DKAFlow: Order Text Tables
==========================
Wording for each locale. The composer decides WHICH lines appear and with
WHICH numbers; these tables only decide how each line reads. Every key must
exist in every locale.
"""

from dkaflow.constants import Locale

RULE = "—" * 38

STRINGS = {
    Locale.FA: {
        "list_sep": "، ",
        # Header
        "title": "🧾 اوردر ست مدیریت DKA (پیشنهادی/کمکی)",
        "patient": "👤 بیمار: {name} | سن: {age} سال | وزن: {weight} kg | {case}",
        "case_new": "نیوکِیس",
        "case_known": "شناخته‌شده",
        # Safety
        "safety_header": "⚠️ هشدارهای ایمنی:",
        "no_insulin_bolus": "• ❌ Insulin bolus ممنوع",
        "hold_insulin_low_k": "• 🔴 Hold insulin if K<3",
        "caution_k": "• 🟠 K بین 3 تا 3.5: قبل از انسولین، K را اصلاح کن + مانیتورینگ",
        # Severity
        "severity": "📌 شدت: {severity}",
        "severity_mild": "خفیف 🟡",
        "severity_moderate": "متوسط 🟠",
        "severity_severe": "شدید 🔴",
        "severity_resolved": "خروج از DKA 🟢",
        "severity_unknown": "نامشخص",
        "derived": "🧮 Corrected Na: {cna} mEq/L | Effective osmolality: {eosm} mOsm/kg",
        "brain_edema_risk": "🧠 ریسک ادم مغزی: {factors} → مانیتول/سالین هایپرتونیک کنار تخت (دوز محاسبه شود)",
        # Fluids
        "fluids_header": "💧 مایعات:",
        "bolus": "• بولوس: NS 0.9%  {bolus} mL طی ۱ ساعت (بدون پتاسیم)",
        "bolus_shock_reassess": "  ↳ در شوک: بعد از بولوس، ارزیابی مجدد و در صورت نیاز تکرار.",
        "no_bolus": "• بولوس لازم نیست (در صورت وضعیت شوک/کاهش پرفیوژن استثنا)",
        "maintenance": "• Maintenance (روزانه): {maintenance} mL/day",
        "deficit": "• Deficit: {deficit} mL",
        "rate": "• ریت مایع: {rate} mL/h  (فرمول 48h)  | {note}",
        "fluid_type": "• نوع مایع بر اساس قند: {fluid_type}",
        "no_vbg_titration": "• ⚠️ ریت را صرفاً بر اساس تغییرات VBG بالا/پایین نکن.",
        "note_shock": "در شوک: بولوس از محاسبه ریت کم نمی‌شود.",
        "note_subtract": "طبق پروتکل: حجم بولوس اولیه از محاسبه ریت کم می‌شود.",
        # Insulin
        "insulin_header": "💉 انسولین:",
        "sc_route": "• مسیر: تزریق زیرجلدی Regular (SQ)",
        "sc_dose": "• دوز پیشنهادی: Regular {dose} unit SC {interval} تا رسیدن به مرکز/کنترل قند",
        "sc_severe": "• 🔴 Severe DKA: ترجیحاً PICU/مرکز مجهز (در صورت اجبار SC با نظر اندوکرین و پایش دقیق).",
        "sc_known_case": "• در کیس شناخته‌شده (خفیف/متوسط) و پرفیوژن خوب: ادامه Long-acting insulin طبق برنامه.",
        "iv_route": "• مسیر: انفوزیون وریدی Regular (در صورت امکان)",
        "iv_start": "• شروع: ۱ ساعت بعد از شروع بولوس/وقتی resuscitation اولیه تمام شد.",
        "iv_dilution": "• رقیق‌سازی: {units}U Regular در {ml} mL NS (۱U/mL)",
        "iv_hold_glucose": "• BS<100: انسولین را ۱ ساعت Hold کن، سپس بر اساس BS دوباره شروع کن.",
        "iv_rate": "• ریت: {rate} U/kg/h = {rate_u_h} U/h ({rate_u_h} mL/h)  (بر اساس BS)",
        "insulin_held_k": "• 🔴 تا اصلاح K (K≥3) انسولین شروع/ادامه داده نشود.",
        # Potassium
        "electrolytes_header": "🧪 پتاسیم/الکترولیت‌ها:",
        "bolus_no_k": "• ⚠️ بولوس بدون پتاسیم",
        "k_plan": "• برنامه پتاسیم: {text}",
        "kphos_split": "• اگر KPhos IV در دسترس است: نصف پتاسیم را KPhos و نصف را KCl بده (برای پیشگیری از هیپوفسفاتمی).",
        "phosphate": "• فسفر: چک شود؛ در هیپوفسفاتمی طبق رفرنس سنی IV/خوراکی بعد از شروع تغذیه.",
        "k_unknown": "K نامشخص: قبل از تصمیم‌گیری اندازه‌گیری شود.",
        "k_high": "K>5.5 → فعلاً KCl نده، K هر ۱ ساعت چک شود.",
        "k_high_normal": "5≤K≤5.5 → KCl {add} mEq/L",
        "k_normal": "3.5≤K<5 → KCl {add} mEq/L",
        "k_low": "3≤K<3.5 → KCl 50–60 mEq/L (~{add}) در PICU + مانیتورینگ",
        "k_critical": "K<3 → KCl 60–80 mEq/L (~{add}) در PICU + مانیتورینگ | انسولین را HOLD کن | KCl {rescue} mEq/kg در ۱ ساعت (max {rescue_max} mEq)",
        # Bicarbonate
        "bicarb_header": "🧯 بیکربنات:",
        "bicarb": "• فقط در pH<6.9 با ناپایداری همودینامیک یا هایپرکالمی مقاوم + با نظر اندو/استاد.",
        # Cerebral edema
        "ce_header": "🧠 ادم مغزی (در صورت شک بالینی):",
        "ce_no_delay": "• درمان را برای تصویربرداری عقب ننداز.",
        "ce_mannitol": "• مانیتول 0.5–1 g/kg (مثلاً ~{mannitol} g برای این بیمار) طی ۱۵ دقیقه  OR",
        "ce_hts": "  سالین هایپرتونیک ۳٪/۵٪، 3 mL/kg (={hts} mL) طی ۱۵ دقیقه",
        "ce_escalate": "• سپس تماس با فلو/اندو و انتقال به PICU",
        # Monitoring
        "monitor_header": "📈 پایش:",
        "monitor_lines": (
            "• قند با گلوکومتر Q1h",
            "• VBG Q2h",
            "• BUN/Na/K/Ca/Mg Q4h",
            "• علائم حیاتی Q1h | I/O Q1h | وضعیت نورولوژیک حداقل Q1h",
        ),
        # Assessment
        "assessment_header": "✅ نکات ثبت‌شده (اختیاری):",
        "assessment": "• {flags}",
        # Footer
        "references": "📚 رفرنس‌ها: ISPAD 2022 / BSPED 2022 + پروتکل غدد اطفال شیراز",
        "disclaimer": "⚠️ این خروجی جایگزین قضاوت بالینی و دستور پزشک مسئول نیست.",
    },
    Locale.EN: {
        "list_sep": ", ",
        "title": "DKA Management – Order Set (assistive)",
        "patient": "Patient: {name} | Age {age}y | Wt {weight}kg | {case}",
        "case_new": "New onset",
        "case_known": "Known",
        "safety_header": "Safety:",
        "no_insulin_bolus": "• NO insulin bolus",
        "hold_insulin_low_k": "• HOLD insulin if K < 3",
        "caution_k": "• K 3–3.5: correct K before insulin + monitoring",
        "severity": "Severity: {severity}",
        "severity_mild": "mild",
        "severity_moderate": "moderate",
        "severity_severe": "severe",
        "severity_resolved": "resolved (out of DKA)",
        "severity_unknown": "unknown",
        "derived": "Corrected Na: {cna} mEq/L | Effective osmolality: {eosm} mOsm/kg",
        "brain_edema_risk": "Brain edema risk: {factors} → mannitol / hypertonic saline at bedside (dose calculated below)",
        "fluids_header": "Fluids:",
        "bolus": "• Bolus: NS 0.9% {bolus} mL over 1 hour (NO potassium)",
        "bolus_shock_reassess": "  ↳ In shock: reassess after the bolus and repeat if needed.",
        "no_bolus": "• No bolus needed (unless shock / poor perfusion)",
        "maintenance": "• Maintenance: {maintenance} mL/day",
        "deficit": "• Deficit: {deficit} mL",
        "rate": "• Rate: {rate} mL/h (48h formula) | {note}",
        "fluid_type": "• Fluid type (by glucose): {fluid_type}",
        "no_vbg_titration": "• Do not titrate the rate on VBG changes alone.",
        "note_shock": "In shock: bolus is not subtracted from the rate.",
        "note_subtract": "Per protocol: initial bolus volume is subtracted from the rate.",
        "insulin_header": "Insulin:",
        "sc_route": "• Route: SubQ Regular",
        "sc_dose": "• SubQ Regular: {dose} units {interval} until transfer / glucose control",
        "sc_severe": "• Severe DKA: PICU / equipped centre preferred (SC only with endocrine advice and close monitoring).",
        "sc_known_case": "• Known case (mild/moderate) with good perfusion: continue long-acting insulin as scheduled.",
        "iv_route": "• Route: IV Regular infusion (if available)",
        "iv_start": "• Start 1 hour after the bolus / once initial resuscitation is complete",
        "iv_dilution": "• Dilution: {units}U Regular in {ml} mL NS (1 U/mL)",
        "iv_hold_glucose": "• BS < 100: HOLD insulin for 1 hour, then restart per BS.",
        "iv_rate": "• Rate: {rate} U/kg/h = {rate_u_h} U/h ({rate_u_h} mL/h) (per glucose)",
        "insulin_held_k": "• Do not start/continue insulin until K is corrected (K ≥ 3).",
        "electrolytes_header": "Potassium / electrolytes:",
        "bolus_no_k": "• Bolus without potassium",
        "k_plan": "• Potassium plan: {text}",
        "kphos_split": "• If IV KPhos is available: give half the potassium as KPhos and half as KCl (prevents hypophosphatemia).",
        "phosphate": "• Phosphate: check; treat hypophosphatemia IV/oral per age reference once feeding starts.",
        "k_unknown": "K unknown: measure before deciding.",
        "k_high": "K > 5.5 → do not add KCl yet, recheck K hourly.",
        "k_high_normal": "5 ≤ K ≤ 5.5 → KCl {add} mEq/L",
        "k_normal": "3.5 ≤ K < 5 → KCl {add} mEq/L",
        "k_low": "3 ≤ K < 3.5 → KCl 50–60 mEq/L (~{add}) with ICU-level monitoring",
        "k_critical": "K < 3 → KCl 60–80 mEq/L (~{add}) with ICU-level monitoring | HOLD insulin | KCl {rescue} mEq/kg over 1h (max {rescue_max} mEq)",
        "bicarb_header": "Bicarbonate:",
        "bicarb": "• Only for pH < 6.9 with hemodynamic instability or refractory hyperkalemia, with endocrine/attending approval.",
        "ce_header": "Cerebral edema (if clinically suspected):",
        "ce_no_delay": "• Do not delay treatment for imaging.",
        "ce_mannitol": "• Mannitol 0.5–1 g/kg (e.g. ~{mannitol} g for this patient) over 15 min OR",
        "ce_hts": "  Hypertonic saline 3%/5%, 3 mL/kg (={hts} mL) over 15 min",
        "ce_escalate": "• Then call fellow/endocrine and transfer to PICU",
        "monitor_header": "Monitoring:",
        "monitor_lines": (
            "• BG by glucometer Q1h",
            "• VBG Q2h",
            "• BUN/Na/K/Ca/Mg Q4h",
            "• Vitals Q1h | I&O Q1h | Neuro status at least Q1h",
        ),
        "assessment_header": "Recorded findings (optional):",
        "assessment": "• {flags}",
        "references": "References: ISPAD 2022 / BSPED 2022 + Shiraz pediatric endocrine protocol",
        "disclaimer": "This output does not replace clinical judgment or the responsible physician's orders.",
    },
}

def strings_for(locale: Locale) -> dict:
    return STRINGS[locale]
